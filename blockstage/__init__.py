"""Block-based stage model: geometry, cube kinds, stages, stage files, textures, timer and title menu."""

__version__ = "0.1.0"

__all__ = [
    "cube",
    "geometry",
    "stage",
    "stage_map",
    "stage_table",
    "stagefile",
    "texture",
    "timer",
    "title",
]