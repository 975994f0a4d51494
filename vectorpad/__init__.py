"""Pre-flight analysis of natural-language directives: gaps, scope, pressure, metrics, Oracul and a flight log."""

__version__ = "0.1.0"

__all__ = [
    "sentence",
    "negativespace",
    "scopedecl",
    "pressure",
    "metrics",
    "oracul_types",
    "mapping",
    "oracul_client",
    "flight",
]