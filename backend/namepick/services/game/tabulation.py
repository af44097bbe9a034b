from typing import Dict, Iterable, List


def tabulate(pick_log: Iterable) -> List[Dict]:
    """Rank picked names by how often they were picked.

    Counts are gathered in first-appearance order and the sort is stable,
    so names with equal counts keep the order in which they were first
    picked. No alphabetical tie-break.
    """
    counts: Dict[str, int] = {}
    for record in pick_log:
        counts[record.picked] = counts.get(record.picked, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{'name': name, 'count': count} for name, count in ranked]
