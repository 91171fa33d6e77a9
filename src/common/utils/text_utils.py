"""Utility functions for names and brands."""


def same_name(left: str | None, right: str | None) -> bool:
    """Case-insensitive equality used for every product and shop name lookup."""
    if left is None or right is None:
        return False
    return left.lower() == right.lower()


def normalize_brand(brand: str | None) -> str | None:
    """Title-cases each word of a brand and collapses repeated spaces ("nike  AIR" -> "Nike Air")."""
    if brand is None:
        return None
    words = [word for word in brand.lower().split(" ") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)
