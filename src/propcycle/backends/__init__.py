"""Backends for Cycler output rendering (text, HTML)."""

from .table import TableFormat, generate_table, save_table_file

__all__ = ["TableFormat", "generate_table", "save_table_file"]
