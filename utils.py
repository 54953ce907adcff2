def compare_long(a, b) -> int:
    """Three-way numeric comparison, ascending."""
    if a == b:
        return 0
    return -1 if a < b else 1


def compare_match(a, b) -> int:
    """
    Orders matches worst first: lower score, then higher id.

    With this ordering the root of a min-heap is the worst match kept so far.
    """
    if a.score == b.score:
        if a.id == b.id:
            return 0
        return -1 if a.id > b.id else 1
    return -1 if a.score < b.score else 1
