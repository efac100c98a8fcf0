import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from pushnotify.gateway import reset_gateway


@pytest.fixture(scope="session")
def pushnotify_bed():
    from pushnotify.domain import pushnotify

    bed = DomainFixture(pushnotify)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(pushnotify_bed):
    with pushnotify_bed.domain_context():
        reset_gateway()
        yield
        reset_gateway()

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
