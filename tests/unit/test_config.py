"""Tests for the capsule.toml and deployment schemas."""

from __future__ import annotations

import math
import tomllib
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from capsule.config import CellLocation, Config, Deployment, TemplateType


class TestConfig:
    """Tests for Config parsing and serialization."""

    def test_defaults(self) -> None:
        config = Config.from_toml('version = "0.7.0"\ndeployment = "d.toml"\n')

        assert config.contracts == []
        assert config.workspace_dir is None
        assert config.rust.toolchain is None

    def test_contract_template_types(self) -> None:
        config = Config.from_toml(
            'version = "0.7.0"\ndeployment = "d.toml"\n'
            'contracts = [{ name = "a", template_type = "C" }, { name = "b" }]\n'
        )

        assert config.contracts[0].template_type is TemplateType.C
        assert config.contracts[1].template_type is TemplateType.RUST

    def test_unknown_template_type(self) -> None:
        with pytest.raises(ValidationError):
            Config.from_toml(
                'version = "0.7.0"\ndeployment = "d.toml"\n'
                'contracts = [{ name = "a", template_type = "Go" }]\n'
            )

    def test_not_toml(self) -> None:
        with pytest.raises(tomllib.TOMLDecodeError):
            Config.from_toml("version: 0.7.0")

    def test_to_toml_round_trip_keeps_extras(self) -> None:
        text = (
            'version = "0.7.0"\n'
            'deployment = "deployment.toml"\n'
            'note = "kept"\n'
            "[rust]\n"
            'workspace_dir = "contracts"\n'
            'docker_image = "builder:latest"\n'
        )
        config = Config.from_toml(text)

        dumped = config.to_toml()

        assert Config.from_toml(dumped) == config
        assert 'note = "kept"' in dumped
        assert "toolchain" not in dumped

    def test_to_toml_keeps_native_date_extras(self) -> None:
        config = Config.from_toml(
            'version = "0.7.0"\ndeployment = "d.toml"\n'
            "released = 2024-01-02\n"
            "built_at = 2024-01-02T03:04:05Z\n"
        )

        reloaded = Config.from_toml(config.to_toml())

        assert reloaded == config
        assert reloaded.model_extra == {
            "released": date(2024, 1, 2),
            "built_at": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        }

    def test_to_toml_keeps_special_float_extras(self) -> None:
        config = Config.from_toml(
            'version = "0.7.0"\ndeployment = "d.toml"\n'
            "ratio = nan\nlimit = inf\n"
        )

        reloaded = Config.from_toml(config.to_toml())

        assert reloaded.model_extra is not None
        assert math.isnan(reloaded.model_extra["ratio"])
        assert reloaded.model_extra["limit"] == math.inf


class TestCellLocation:
    """Tests for CellLocation validation."""

    def test_file(self) -> None:
        assert CellLocation(file="build/release/a").file == "build/release/a"

    def test_out_point(self) -> None:
        location = CellLocation(tx_hash="0x01", index=3)

        assert (location.tx_hash, location.index) == ("0x01", 3)

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"tx_hash": "0x01"},
            {"index": 0},
            {"file": "a", "tx_hash": "0x01", "index": 0},
        ],
    )
    def test_invalid(self, fields: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            CellLocation(**fields)


class TestDeployment:
    """Tests for Deployment parsing."""

    def test_empty_document(self) -> None:
        deployment = Deployment.from_toml("")

        assert deployment.cells == []
        assert deployment.dep_groups == []
        assert deployment.lock is None

    def test_lock_keeps_unknown_keys(self) -> None:
        deployment = Deployment.from_toml(
            '[lock]\ncode_hash = "0x00"\nnote = "multisig"\n'
        )

        assert deployment.lock is not None
        assert deployment.lock.model_extra == {"note": "multisig"}

    def test_bad_hash_type(self) -> None:
        with pytest.raises(ValidationError):
            Deployment.from_toml('[lock]\ncode_hash = "0x00"\nhash_type = "any"\n')
