import pytest

from rentnest.db.mongo import MongoConnectionError
from rentnest.features.migrations.jobs import migration_jobs
from rentnest.features.migrations.services.migrator import MigrationConnectionError


class FakeManager:
    instances: list["FakeManager"] = []
    fail_initialize = False

    def __init__(self):
        self.closed = False
        FakeManager.instances.append(self)

    async def initialize(self):
        if FakeManager.fail_initialize:
            raise MongoConnectionError("MongoDB connection failed: ECONNREFUSED")

    def database(self):
        return "rentnest-db"

    async def close(self):
        self.closed = True


@pytest.fixture
def patched_job(monkeypatch, fake_store, booking_dataset):
    FakeManager.instances = []
    FakeManager.fail_initialize = False
    store = fake_store(
        {**booking_dataset, "users": [{"_id": 1, "accountType": "owner"}]}
    )
    monkeypatch.setattr(migration_jobs, "MongoClientManager", FakeManager)
    monkeypatch.setattr(migration_jobs, "MongoDocumentStore", lambda database: store)
    return store


@pytest.mark.asyncio
async def test_booking_job_runs_and_closes_client(patched_job):
    report = await migration_jobs.run_booking_schema_migration()

    assert report.migration == "booking_schema"
    assert report.updated == 2
    assert FakeManager.instances[0].closed is True


@pytest.mark.asyncio
async def test_accounttype_job(patched_job):
    report = await migration_jobs.run_accounttype_to_role()

    assert report.updated == 1
    assert patched_job.collections["users"][0]["role"] == "owner"


@pytest.mark.asyncio
async def test_job_respects_dry_run_setting(patched_job, monkeypatch):
    monkeypatch.setattr(migration_jobs.settings, "MIGRATION_DRY_RUN", True)

    report = await migration_jobs.run_booking_schema_migration()

    assert report.dry_run is True
    assert patched_job.updates == []


@pytest.mark.asyncio
async def test_connection_failure_is_fatal(patched_job):
    FakeManager.fail_initialize = True

    with pytest.raises(MigrationConnectionError):
        await migration_jobs.run_booking_schema_migration()

    assert patched_job.updates == []
    assert FakeManager.instances[0].closed is True
