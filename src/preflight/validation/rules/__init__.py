"""Rule families; ``DEFAULT_RULES`` is the ordered full set."""

from preflight.validation.rules import (
    content,
    data_quality,
    fair,
    integrity,
    metadata,
    naming,
    structure,
)
from preflight.validation.schemas import Rule

DEFAULT_RULES: tuple[Rule, ...] = (
    *structure.RULES,
    *naming.RULES,
    *metadata.RULES,
    *content.RULES,
    *data_quality.RULES,
    *fair.RULES,
    *integrity.RULES,
)

__all__ = ["DEFAULT_RULES"]
