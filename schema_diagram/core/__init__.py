"""Schema model, options and schema file loading"""
