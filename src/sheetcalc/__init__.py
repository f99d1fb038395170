"""sheetcalc -- formula-evaluation core for a spreadsheet engine."""

__version__ = "0.1.0"
