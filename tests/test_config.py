"""Tests for the default-dtype configuration system."""

import logging
import os

import numpy as np
import pytest

from combinatorial_coding import encode_permutation
from combinatorial_coding._config import get_default_dtype, set_default_dtype

ENV_VAR = "COMBINATORIAL_CODING_DTYPE"


class TestGetDefaultDtype:
    """Tests for get_default_dtype() resolution order."""

    def setup_method(self):
        """Reset state before each test."""
        import combinatorial_coding._config as _cfg
        _cfg._dtype_override = None
        os.environ.pop(ENV_VAR, None)

    def teardown_method(self):
        """Reset state after each test."""
        import combinatorial_coding._config as _cfg
        _cfg._dtype_override = None
        os.environ.pop(ENV_VAR, None)

    def test_builtin_default_is_uint64(self):
        assert get_default_dtype() == np.uint64

    def test_env_var_overrides_builtin(self):
        os.environ[ENV_VAR] = "uint32"
        assert get_default_dtype() == np.uint32

    def test_env_var_case_insensitive(self):
        os.environ[ENV_VAR] = "UInt16"
        assert get_default_dtype() == np.uint16

    def test_invalid_env_var_ignored(self, caplog):
        os.environ[ENV_VAR] = "float32"
        with caplog.at_level(logging.DEBUG, logger="combinatorial_coding._config"):
            assert get_default_dtype() == np.uint64
        assert "Ignoring" in caplog.text

    def test_programmatic_override_wins_over_env(self):
        os.environ[ENV_VAR] = "uint32"
        set_default_dtype("int64")
        assert get_default_dtype() == np.int64

    def test_auto_restores_default(self):
        set_default_dtype("uint8")
        assert get_default_dtype() == np.uint8
        set_default_dtype("auto")
        assert get_default_dtype() == np.uint64

    def test_encoders_use_default(self):
        set_default_dtype("uint16")
        code = encode_permutation([3, 6, 5, 7, 0, 2, 1, 4])
        assert isinstance(code, np.uint16)

    def test_explicit_dtype_beats_default(self):
        set_default_dtype("uint16")
        code = encode_permutation([1, 0], dtype=np.uint8)
        assert isinstance(code, np.uint8)


class TestSetDefaultDtype:
    """Tests for set_default_dtype() validation."""

    def setup_method(self):
        import combinatorial_coding._config as _cfg
        _cfg._dtype_override = None

    def teardown_method(self):
        import combinatorial_coding._config as _cfg
        _cfg._dtype_override = None

    def test_rejects_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown integer dtype"):
            set_default_dtype("bigint")

    def test_rejects_float_dtype(self):
        with pytest.raises(ValueError, match="Unknown integer dtype"):
            set_default_dtype("float64")

    def test_strips_whitespace(self):
        set_default_dtype("  UINT32 ")
        assert get_default_dtype() == np.uint32
