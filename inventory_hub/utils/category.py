from inventory_hub.core.constants import DEFAULT_CATEGORY


class CategoryClassifier:
    """Derives a product category from a partner's free-text label."""

    KEYWORDS = (
        ("widget", "widgets"),
        ("gadget", "gadgets"),
    )

    @classmethod
    def get_category_from_label(cls, label: str) -> str:
        """Case-insensitive keyword match; unmatched labels fall into accessories."""
        text = (label or "").lower()
        for keyword, category in cls.KEYWORDS:
            if keyword in text:
                return category
        return DEFAULT_CATEGORY
