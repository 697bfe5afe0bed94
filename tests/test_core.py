"""Tests for core infrastructure modules."""

import asyncio
import logging
import re
import pytest
from pydantic import ValidationError

from logjanitor.base.config import AWSConfig, JanitorConfig, validate_config
from logjanitor.base.criteria import FilterCriteria, now_millis
from logjanitor.base.exceptions import InvalidArgumentError
from logjanitor.base.log_groups import LogGroup
from logjanitor.base.logger import JanitorLogger, StructuredFormatter
from logjanitor.base.async_support import async_wrap, AsyncMixin


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestAWSConfig:
    def test_explicit_values(self):
        cfg = AWSConfig(
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
            region_name="us-west-2",
        )
        assert cfg.aws_access_key_id == "AKIA"
        assert cfg.region_name == "us-west-2"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        monkeypatch.setenv("AWS_PROFILE", "ops")
        cfg = AWSConfig()
        assert cfg.aws_access_key_id == "env_key"
        assert cfg.region_name == "eu-west-1"
        assert cfg.profile_name == "ops"

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            AWSConfig(region="us-east-1")


class TestJanitorConfig:
    def test_defaults(self):
        cfg = JanitorConfig()
        assert cfg.client_config is None
        assert cfg.concurrency == 2
        assert cfg.describe_limit == 50

    def test_nested_client_config(self):
        cfg = JanitorConfig(client_config={"region_name": "ap-south-1"})
        assert isinstance(cfg.client_config, AWSConfig)
        assert cfg.client_config.region_name == "ap-south-1"

    @pytest.mark.parametrize("values", [
        {"concurrency": 0},
        {"describe_limit": 51},
        {"describe_limit": 0},
        {"workers": 2},
    ])
    def test_invalid(self, values):
        with pytest.raises(ValidationError):
            JanitorConfig(**values)


class TestValidateConfig:
    def test_dict(self):
        cfg = validate_config({"concurrency": 3})
        assert isinstance(cfg, JanitorConfig)
        assert cfg.concurrency == 3

    def test_none(self):
        assert validate_config(None).concurrency == 2

    def test_model_passthrough(self):
        cfg = JanitorConfig(concurrency=5)
        assert validate_config(cfg) is cfg


# ══════════════════════════════════════════════════════════════════════
# Filter criteria
# ══════════════════════════════════════════════════════════════════════

def _group(name: str, age_ms: int, now: int) -> LogGroup:
    return LogGroup(logGroupName=name, creationTime=now - age_ms)


class TestFilterCriteria:
    def test_default_cutoff_is_now(self):
        before = now_millis()
        criteria = FilterCriteria()
        assert before <= criteria.created_before <= now_millis()
        assert criteria.prefix is None
        assert criteria.exclude is None

    def test_creation_time_is_strict(self):
        now = now_millis()
        criteria = FilterCriteria(created_before=now - 1000)
        assert criteria.matches(_group("old", 1001, now))
        assert not criteria.matches(_group("edge", 1000, now))

    def test_prefix(self):
        now = now_millis()
        criteria = FilterCriteria(created_before=now, prefix="/aws/lambda/")
        assert criteria.matches(_group("/aws/lambda/fn", 10, now))
        assert not criteria.matches(_group("/aws/ecs/svc", 10, now))

    def test_exclude_searches_anywhere(self):
        now = now_millis()
        criteria = FilterCriteria(created_before=now, exclude=re.compile("prod"))
        assert not criteria.matches(_group("/aws/lambda/prod-api", 10, now))
        assert criteria.matches(_group("/aws/lambda/dev-api", 10, now))

    def test_from_options_drops_none(self):
        criteria = FilterCriteria.from_options({"prefix": None, "exclude": None})
        assert criteria.prefix is None

    def test_from_options_rejects_string_exclude(self):
        with pytest.raises(InvalidArgumentError, match="exclude"):
            FilterCriteria.from_options({"exclude": "prod"})

    def test_from_options_rejects_non_dict(self):
        with pytest.raises(InvalidArgumentError):
            FilterCriteria.from_options("prefix")

    def test_float_timestamp(self):
        assert FilterCriteria(created_before=1.5e12).created_before == 1.5e12

    @pytest.mark.parametrize("cutoff", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_cutoff(self, cutoff):
        with pytest.raises(InvalidArgumentError, match="finite"):
            FilterCriteria.from_options({"created_before": cutoff})

    def test_nan_cutoff_matches_nothing(self):
        criteria = FilterCriteria.model_construct(
            created_before=float("nan"), prefix=None, exclude=None
        )
        assert not criteria.matches(_group("any", 10, now_millis()))


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestJanitorLogger:
    def test_log_operation(self, capfd):
        logger = JanitorLogger("test_jn")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("deleted group", operation="delete_one", log_group="/app/old")
        captured = capfd.readouterr()
        assert "deleted group" in captured.err
        assert "/app/old" in captured.err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.operation = "delete_many"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"operation": "delete_many"' in output
        assert '"request_id": "abc"' in output
        assert "log_group" not in output

    def test_run_shares_request_id(self):
        logger = JanitorLogger("test_jn_run")
        with logger.run() as run_id:
            with logger.run() as inner_id:
                assert inner_id == run_id
        with logger.run() as next_id:
            assert next_id != run_id

    def test_records_inside_run_carry_its_id(self, caplog):
        logger = JanitorLogger("test_jn_records")
        with caplog.at_level(logging.INFO, logger="test_jn_records"):
            with logger.run() as run_id:
                logger.info("one", count=3)
                logger.info("two")
            logger.info("outside")
        ids = [r.request_id for r in caplog.records]
        assert ids[:2] == [run_id, run_id]
        assert ids[2] != run_id
        assert caplog.records[0].count == 3


# ══════════════════════════════════════════════════════════════════════
# Async Support
# ══════════════════════════════════════════════════════════════════════

class TestAsyncWrap:
    def test_basic(self):
        def sync_fn(x: int) -> int:
            return x * 2

        async_fn = async_wrap(sync_fn)
        result = asyncio.run(async_fn(5))
        assert result == 10

    def test_preserves_name(self):
        def my_func():
            pass

        wrapped = async_wrap(my_func)
        assert wrapped.__name__ == "my_func"


class TestAsyncMixin:
    def test_auto_generates(self):
        class MyService(AsyncMixin):
            def delete_log_group(self, name: str) -> str:
                return f"deleted {name}"

        svc = MyService()
        assert hasattr(svc, "adelete_log_group")
        result = asyncio.run(svc.adelete_log_group("x"))
        assert result == "deleted x"

    def test_keeps_explicit_async_variant(self):
        class MyService(AsyncMixin):
            def delete_log_group(self, name: str) -> str:
                return "sync"

            async def adelete_log_group(self, name: str) -> str:
                return "async"

        assert asyncio.run(MyService().adelete_log_group("x")) == "async"
