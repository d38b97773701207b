import pytest

from payments.tests.helpers import BACKENDS, make_store


@pytest.fixture(params=BACKENDS)
def store(request, tmp_path):
    """A freshly reset ledger store, once per backend."""
    s = make_store(request.param, str(tmp_path))
    s.reset()
    yield s
    s.close()
