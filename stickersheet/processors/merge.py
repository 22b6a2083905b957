from ..geometry import Rect


def merge_rects(rects: list[Rect], distance: int) -> list[Rect]:
    """
    Merge boxes lying closer than `distance` on both axes.

    Erosion often splits one character into head, torso and limbs; folding
    nearby boxes together reassembles them. Passes repeat until one makes
    no merge. Quadratic per pass, which is fine for the few dozen boxes a
    sheet produces.

    Args:
        rects: Boxes to consolidate
        distance: Gap (in pixels) below which two boxes are merged

    Returns:
        Merged boxes, in order of first occurrence
    """
    merged = list(rects)
    changed = True

    while changed:
        changed = False
        result = []
        used = [False] * len(merged)

        for i, rect in enumerate(merged):
            if used[i]:
                continue
            used[i] = True
            current = rect

            for j in range(i + 1, len(merged)):
                if used[j]:
                    continue
                dx, dy = current.gap(merged[j])
                if dx < distance and dy < distance:
                    current = current.union(merged[j])
                    used[j] = True
                    changed = True

            result.append(current)
        merged = result

    return merged
