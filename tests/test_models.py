"""
Unit tests for release_download_tracker.models.
"""

import pytest

from release_download_tracker.models import CloneRecord, FormatCount, Repository, Snapshot


def test_repository_parse():
    repo = Repository.parse("octocat/hello-world")
    assert repo.owner == "octocat"
    assert repo.name == "hello-world"
    assert repo.full_name == "octocat/hello-world"
    assert repo.storage_key == "octocat_hello-world"


@pytest.mark.parametrize("bad", ["octocat", "octocat/", "/repo", "a/b/c", ""])
def test_repository_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        Repository.parse(bad)


def test_clone_record_date_truncates_timestamp():
    record = CloneRecord.from_github_entry(
        {"timestamp": "2024-03-05T00:00:00Z", "count": 7, "uniques": 3}
    )
    assert record.date == "2024-03-05"
    assert record.count == 7


def test_snapshot_from_clone():
    snapshot = Snapshot.from_clone(CloneRecord(4, "2024-01-02T00:00:00Z", 1))
    assert snapshot.to_dict() == {
        "date": "2024-01-02",
        "total": 4,
        "formats": [{"extension": "clones", "count": 4}],
    }


def test_snapshot_from_dict_accepts_legacy_ext_key():
    snapshot = Snapshot.from_dict(
        {"date": "2024-01-02", "total": 3, "formats": [{"ext": ".zip", "count": 3}]}
    )
    assert snapshot.formats == [FormatCount(".zip", 3)]


@pytest.mark.parametrize("entry", [
    {"date": "2024/01/02", "total": 1, "formats": []},
    {"date": "2024-01-02", "total": -1, "formats": []},
    {"date": "2024-01-02", "total": "1", "formats": []},
    {"date": "2024-01-02", "total": 1, "formats": {}},
    {"date": "2024-01-02", "total": 1, "formats": [{"extension": ".zip"}]},
    ["2024-01-02", 1],
])
def test_snapshot_from_dict_rejects_invalid(entry):
    with pytest.raises(ValueError):
        Snapshot.from_dict(entry)


@pytest.mark.parametrize("entry", [
    {"timestamp": None, "count": 1},
    {"timestamp": "2024-05-30 00:00:00", "count": 1},
    {"timestamp": "2024-05-30T00:00:00Z", "count": -1},
])
def test_clone_record_rejects_malformed_entry(entry):
    with pytest.raises(ValueError):
        CloneRecord.from_github_entry(entry)
