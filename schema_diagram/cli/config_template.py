"""
Options file template for schema_diagram
"""

OPTIONS_TEMPLATE = """# Schema Diagram Options
# ============================================================================
# Every setting below is shown with its default value. Remove the ones you
# do not need to change. Keys may also be written in camelCase
# (e.g. minTableWidth). Values support ${VAR} and ${VAR:-default}.

version: 1
title: "Database Structure Diagram"

options:
  # Table sizing
  # --------------------------------------------------------------------------
  min_table_width: 200
  max_table_width: 400
  table_header_height: 35
  column_row_height: 22
  font_size: 12
  header_font_size: 14
  text_padding: 24
  max_columns: 15          # Extra columns collapse into "... and N more columns"

  # Placement
  # --------------------------------------------------------------------------
  table_padding: 60        # Gap between tables in the grid
  canvas_margin: 100       # Empty margin around the tables

  # Routing
  # --------------------------------------------------------------------------
  connection_margin: 25    # Distance of the routing anchor from the table edge
  collision_buffer: 25     # Clearance lines must keep from tables
  visual_buffer: 50        # Extra clearance on top of collision_buffer
  safe_zone_offset: 40     # Must not exceed canvas_margin
  routing_spacing_top: 60
  routing_spacing_side: 40
  grid_cell_size: 20       # Resolution of the grid search

  # Display
  # --------------------------------------------------------------------------
  show_data_types: true
  show_constraints: true   # Append NOT NULL to non-nullable columns
  color_scheme: "modern"   # Options: modern, classic, minimal
  debug_paths: false       # Draw buffers, routing bands and waypoints

output:
  file: "database_diagram.svg"
  format: "svg"            # Options: svg, json
"""
