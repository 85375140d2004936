"""Excel styling, formatting, and writing utilities."""
from .formatters import NUMBER_FORMATS, cell_value, fit_columns, style_header, write_cell
from .writer import ExcelWriter, columns_for
