from cellplot.adapters.normalize import normalize_points, normalize_values, normalize_xy

__all__ = ["normalize_points", "normalize_values", "normalize_xy"]
