"""End-to-end tests of the demo walkthrough against SQLite."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import Engine
from sqlalchemy.exc import OperationalError

from src.crud_demo.core.exceptions import DatabaseConnectionError
from src.crud_demo.core.services.database import DbSessionService, connect
from src.crud_demo.demo.runner import DemoReport, DemoRunner, run_demo
from src.crud_demo.entities.core.user import User, UserRepository, UserTable
from src.crud_demo.runtime.config.config_data import ConfigData, DemoConfig


class TestRunDemo:
    """The full walkthrough, start to finish."""

    @pytest.fixture
    def report(self, sqlite_config: ConfigData) -> DemoReport:
        return run_demo(sqlite_config)

    def test_connection_check_passes(self, report: DemoReport):
        assert report.connected is True

    def test_three_users_created(self, report: DemoReport):
        assert [(u.name, u.age, u.phone) for u in report.created] == [
            ("Rushikesh", 21, 7458965896),
            ("Ram", 22, 7458965897),
            ("Raju", 18, 7458965898),
        ]
        assert len({u.id for u in report.created}) == 3

    def test_query_all_returns_created_users(self, report: DemoReport):
        assert report.all_users == report.created

    def test_projection_holds_only_names(self, report: DemoReport):
        assert report.names == [{"name": "Rushikesh"}, {"name": "Ram"}, {"name": "Raju"}]

    def test_filter_excludes_minors(self, report: DemoReport):
        assert report.filtered_names == ["Rushikesh", "Ram"]

    def test_update_and_delete_touch_one_row(self, report: DemoReport):
        assert report.updated_count == 1
        assert report.deleted_count == 1

    def test_raju_is_gone(self, report: DemoReport):
        assert [u.name for u in report.remaining] == ["Rushikesh", "Ram"]

    def test_engine_is_disposed_when_a_step_fails(self, sqlite_config: ConfigData, monkeypatch):
        engine = MagicMock(spec=Engine)
        monkeypatch.setattr(
            DemoRunner, "run", MagicMock(side_effect=RuntimeError("mid-run failure"))
        )

        with pytest.raises(RuntimeError, match="mid-run failure"):
            run_demo(sqlite_config, engine=engine)

        engine.dispose.assert_called_once()


class TestDemoRunnerSteps:
    """Individual steps against a shared in-memory database."""

    @pytest.fixture
    def runner(self, db_service: DbSessionService) -> DemoRunner:
        runner = DemoRunner(db_service)
        runner.reset_storage()
        return runner

    def test_run_is_repeatable(self, runner: DemoRunner):
        """Storage is reset first, so a second run sees the same data."""
        first = runner.run()
        second = runner.run()

        assert [u.name for u in second.remaining] == [u.name for u in first.remaining]
        assert second.updated_count == 1

    def test_update_is_visible(self, runner: DemoRunner, db_service: DbSessionService):
        runner.insert(User(name="Raju", age=18, phone=7458965898))

        assert runner.update({"phone": 1234567890}, UserTable.name == "Raju") == 1

        with db_service.session_scope() as session:
            raju = UserRepository(session).get_by_name("Raju")
        assert raju is not None
        assert raju.phone == 1234567890

    def test_query_filtered(self, runner: DemoRunner):
        runner.insert(User(name="Old", age=60, phone=1))
        runner.insert(User(name="Young", age=10, phone=2))
        runner.insert(User(name="Unknown", phone=3))

        assert [u.name for u in runner.query_filtered(UserTable.age > 20)] == ["Old"]


class TestConnectionCheckPolicy:
    """A failed connection check continues by default and aborts on request."""

    def test_continue_by_default(self, unreachable_config: ConfigData):
        with connect(unreachable_config.database) as db:
            runner = DemoRunner(db, DemoConfig())

            assert runner.check_connection() is False
            # The next real operation fails loudly
            with pytest.raises(OperationalError):
                runner.reset_storage()

    def test_run_demo_fails_on_first_real_operation(self, unreachable_config: ConfigData):
        with pytest.raises(OperationalError):
            run_demo(unreachable_config)

    def test_abort_policy_raises(self, unreachable_config: ConfigData):
        config = unreachable_config.model_copy(
            update={"demo": DemoConfig(abort_on_connection_failure=True)}
        )

        with pytest.raises(DatabaseConnectionError, match="Unable to connect"):
            run_demo(config)
