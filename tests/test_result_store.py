import boto3
import pytest
from moto import mock_aws

from config.settings import StorageConfig
from services.storage import LocalResultStore, S3ResultStore, get_result_store
from services.storage.base import user_segment
from conftest import make_result

BUCKET = "test-quiz-results"
REGION = "us-east-1"


@pytest.fixture
def s3_client(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(Bucket=BUCKET)
        yield client


def test_user_segment_is_path_safe_and_distinct():
    segments = {user_segment(u) for u in ["bob smith", "bob_smith", "../etc/passwd", "anonymous"]}

    assert len(segments) == 4
    assert all(s.isalnum() for s in segments)
    assert user_segment(None) == "anonymous"
    assert user_segment("anonymous") != user_segment(None)


# ----------------------------------------------------------------------
# Local store
# ----------------------------------------------------------------------

def test_local_history_is_most_recent_first(local_store):
    older = make_result("alice", "Rome", ["q1"], minutes_ago=60)
    newer = make_result("alice", "Paris", ["q2"], minutes_ago=1)
    local_store.save(older)
    local_store.save(newer)
    local_store.save(make_result("bob", "Rome", ["q3"]))

    history = local_store.find_by_user_order_by_time_desc("alice")

    assert [r.result_id for r in history] == [newer.result_id, older.result_id]
    assert history[0] == newer


def test_local_history_for_unknown_user(local_store):
    assert local_store.find_by_user_order_by_time_desc("nobody") == []


def test_local_store_skips_corrupt_files(local_store, tmp_path):
    saved = make_result("alice", "Rome", ["q1"])
    path = local_store.save(saved)
    (tmp_path / "store" / "results" / user_segment("alice") / "broken.json").write_text("{not json")

    history = local_store.find_by_user_order_by_time_desc("alice")

    assert path.endswith(f"{saved.result_id}.json")
    assert [r.result_id for r in history] == [saved.result_id]


# ----------------------------------------------------------------------
# S3 store
# ----------------------------------------------------------------------

def test_s3_save_and_history(s3_client):
    store = S3ResultStore(BUCKET, REGION, client=s3_client)
    older = make_result("alice", "Rome", ["q1"], minutes_ago=30)
    newer = make_result("alice", "Rome", ["q2"], minutes_ago=2)

    location = store.save(older)
    store.save(newer)
    store.save(make_result("bob", "Rome", ["q3"]))

    key = f"users/{user_segment('alice')}/results/{older.result_id}.json"
    assert location == f"s3://{BUCKET}/{key}"
    head = s3_client.head_object(Bucket=BUCKET, Key=key)
    assert head["ContentType"] == "application/json"
    assert head["Metadata"]["result_id"] == older.result_id

    history = store.find_by_user_order_by_time_desc("alice")
    assert [r.result_id for r in history] == [newer.result_id, older.result_id]


def test_s3_skips_invalid_objects(s3_client):
    store = S3ResultStore(BUCKET, REGION, client=s3_client)
    saved = make_result("alice", "Rome", ["q1"])
    store.save(saved)
    s3_client.put_object(Bucket=BUCKET, Key=f"users/{user_segment('alice')}/results/garbage.json", Body=b"[]")

    history = store.find_by_user_order_by_time_desc("alice")

    assert [r.result_id for r in history] == [saved.result_id]


def test_factory_selects_backend(tmp_path, s3_client):
    local = get_result_store(StorageConfig(env="local", local_root=str(tmp_path / "results")))
    remote = get_result_store(StorageConfig(env="aws", region=REGION, results_bucket=BUCKET))

    assert isinstance(local, LocalResultStore)
    assert isinstance(remote, S3ResultStore)
    assert remote.find_by_user_order_by_time_desc("alice") == []


@pytest.mark.parametrize("backend", ["local", "s3"])
def test_similar_usernames_do_not_share_history(backend, local_store, request):
    if backend == "local":
        store = local_store
    else:
        store = S3ResultStore(BUCKET, REGION, client=request.getfixturevalue("s3_client"))
    store.save(make_result("bob smith", "Rome", ["Who founded Rome?"]))

    assert store.find_by_user_order_by_time_desc("bob_smith") == []
    assert [r.user for r in store.find_by_user_order_by_time_desc("bob smith")] == ["bob smith"]
