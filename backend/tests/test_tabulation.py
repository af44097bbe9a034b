from namepick.services.game import PickRecord, tabulate


def log(*pairs):
    return [PickRecord(picker=a, picked=b) for a, b in pairs]


def test_empty_log():
    assert tabulate([]) == []


def test_higher_count_comes_first():
    ranked = tabulate(log(('A', 'X'), ('B', 'X'), ('C', 'Y'), ('A', 'Y'), ('B', 'Y')))
    assert ranked == [{'name': 'Y', 'count': 3}, {'name': 'X', 'count': 2}]


def test_ties_keep_first_appearance_not_alphabetical():
    ranked = tabulate(log(('A', 'Mia'), ('B', 'Ann'), ('C', 'Ann'), ('A', 'Mia')))
    assert [r['name'] for r in ranked] == ['Mia', 'Ann']
