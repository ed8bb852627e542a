import json

import pytest

from agentkit.evolution import Candidate, CandidateError, CandidateKind, CandidateQueue


def make_candidate(cid="c1", kind=CandidateKind.RULE):
    return Candidate(
        id=cid,
        kind=kind,
        name="Use tabs",
        rationale="user asked twice",
        body="# rule\nalways tabs\n",
        created_at=1700000000,
    )


def test_candidate_round_trip():
    c = make_candidate(kind=CandidateKind.SKILL)
    assert Candidate.from_dict(c.to_dict()) == c


def test_candidate_kind_serialised_snake_case():
    assert make_candidate().to_dict()["kind"] == "rule"


def test_candidate_from_dict_missing_field():
    data = make_candidate().to_dict()
    del data["name"]
    with pytest.raises(ValueError):
        Candidate.from_dict(data)


@pytest.mark.asyncio
async def test_missing_file_lists_empty(tmp_path):
    queue = CandidateQueue(tmp_path / "evolution" / "queue.json")
    assert await queue.list() == []


@pytest.mark.asyncio
async def test_empty_file_lists_empty(tmp_path):
    path = tmp_path / "queue.json"
    path.write_bytes(b"")
    assert await CandidateQueue(path).list() == []


@pytest.mark.asyncio
async def test_enqueue_creates_parent_and_persists(tmp_path):
    path = tmp_path / "evolution" / "queue.json"
    queue = CandidateQueue(path)
    first, second = make_candidate("a"), make_candidate("b", CandidateKind.SKILL)
    await queue.enqueue(first)
    await queue.enqueue(second)
    assert path.exists()
    assert await CandidateQueue(path).list() == [first, second]
    assert not path.with_name("queue.json.tmp").exists()


@pytest.mark.asyncio
async def test_file_is_pretty_json_array(tmp_path):
    path = tmp_path / "queue.json"
    c = make_candidate()
    await CandidateQueue(path).enqueue(c)
    text = path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert json.loads(text) == [c.to_dict()]


@pytest.mark.asyncio
async def test_remove_returns_candidate(tmp_path):
    queue = CandidateQueue(tmp_path / "queue.json")
    first, second = make_candidate("a"), make_candidate("b")
    await queue.enqueue(first)
    await queue.enqueue(second)
    assert await queue.remove("a") == first
    assert await queue.list() == [second]


@pytest.mark.asyncio
async def test_remove_unknown_returns_none_and_keeps_items(tmp_path):
    queue = CandidateQueue(tmp_path / "queue.json")
    c = make_candidate("a")
    await queue.enqueue(c)
    assert await queue.remove("zzz") is None
    assert await queue.list() == [c]


@pytest.mark.asyncio
async def test_remove_on_missing_file_writes_empty_queue(tmp_path):
    path = tmp_path / "queue.json"
    queue = CandidateQueue(path)
    assert await queue.remove("a") is None
    assert json.loads(path.read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "queue.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CandidateError):
        await CandidateQueue(path).list()