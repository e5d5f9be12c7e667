"""Pure data model, unit conversion and metric computations."""
