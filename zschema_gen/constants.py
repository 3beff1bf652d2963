from __future__ import annotations

# Output formats known to the diagram registry.
FORMAT_ARCHIMATE = "archimate"
FORMAT_MERMAID = "mermaid"
FORMAT_DEFAULT = FORMAT_ARCHIMATE

OUT_DEFAULT = "out"

# PlantUML header directives.
SCALE_DEFAULT = 1.0
DPI_DEFAULT = 96

# Keys accepted in a YAML config file.
CONFIG_KEYS: tuple[str, ...] = (
    "out",
    "format",
    "scale",
    "dpi",
    "strict",
    "ignore",
    "escalate",
)

WILDCARD_LABEL = "ALL"
