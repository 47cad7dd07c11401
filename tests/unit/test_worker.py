import pytest

from rentnest.features.migrations.domain.models import MigrationReport
from rentnest.features.migrations.services.migrator import MigrationConnectionError
from rentnest.jobs import worker


@pytest.mark.asyncio
async def test_run_worker_runs_job(monkeypatch):
    called = {"ok": False}

    async def dummy_job():
        called["ok"] = True
        return MigrationReport(migration="dummy", collection="things")

    monkeypatch.setitem(worker.JOB_REGISTRY, "dummy", dummy_job)

    report = await worker.run_worker("dummy")

    assert called["ok"] is True
    assert report.migration == "dummy"


@pytest.mark.asyncio
async def test_run_worker_unknown_job():
    with pytest.raises(ValueError):
        await worker.run_worker("missing")


def test_registry_has_migrations():
    assert set(worker.JOB_REGISTRY) == {"accounttype_to_role", "booking_schema"}


def test_main_exit_codes(monkeypatch):
    monkeypatch.setattr(worker, "setup_logging", lambda level: None)

    async def ok_job():
        return MigrationReport(migration="ok", collection="things", updated=1)

    async def failed_job():
        return MigrationReport(migration="bad", collection="things", failed=1)

    async def unreachable_job():
        raise MigrationConnectionError("no server")

    monkeypatch.setitem(worker.JOB_REGISTRY, "ok", ok_job)
    monkeypatch.setitem(worker.JOB_REGISTRY, "bad", failed_job)
    monkeypatch.setitem(worker.JOB_REGISTRY, "down", unreachable_job)

    for name, code in (("ok", 0), ("bad", 1), ("down", 1), ("no_such_job", 1)):
        with pytest.raises(SystemExit) as exc_info:
            worker.main(name)
        assert exc_info.value.code == code


def test_resolve_job_name_from_env(monkeypatch):
    monkeypatch.setattr(worker.sys, "argv", ["worker"])
    monkeypatch.setenv("WORKER_JOB", " Booking_Schema ")

    assert worker._resolve_job_name() == "booking_schema"


def test_main_without_job_name_exits_cleanly(monkeypatch):
    monkeypatch.setattr(worker, "setup_logging", lambda level: None)
    monkeypatch.setattr(worker.sys, "argv", ["worker"])
    monkeypatch.delenv("WORKER_JOB", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        worker.main()

    assert exc_info.value.code == 1
