import pytest

from risp.interpreter import Interpreter
from risp.reader.reader import Reader
from risp.types.errors import EvalError
from risp.types.symbol import Symbols


@pytest.fixture
def symbols():
    return Symbols()


@pytest.fixture
def reader(symbols):
    return Reader(symbols)


@pytest.fixture
def interp(monkeypatch):
    # Tests must not depend on the caller's environment
    monkeypatch.delenv("RISP_MAX_DEPTH", raising=False)
    monkeypatch.delenv("RISP_MAX_FRAMES", raising=False)
    return Interpreter()


@pytest.fixture
def run(interp):
    """Evaluate a whole source and return the value of its last form."""
    def _run(source):
        return interp.eval_source(source)[-1]
    return _run


@pytest.fixture
def fails(interp):
    """Evaluate a source expected to fail and return the EvalError raised."""
    def _fails(source, error_type=EvalError):
        with pytest.raises(error_type) as info:
            interp.eval_source(source)
        return info.value
    return _fails
