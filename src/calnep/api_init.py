"""Conversion table bootstrap (import side-effect)."""
from .api import set_table
from .engines.table import load_table

set_table(load_table())
