"""Enemy AI: perception and per-kind behaviours."""
