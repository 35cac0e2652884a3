"""navscope — infer date/value columns from a fund valuation sheet and compute its returns."""

__version__ = "1.0.0"
