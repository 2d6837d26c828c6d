import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def order_management_bed():
    from order_management.domain import order_management

    bed = DomainFixture(order_management)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(order_management_bed):
    with order_management_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def make_customer():
    """Persist a customer and return it."""
    from order_management.customer.customer import Customer, CustomerSegment

    def _make(segment=CustomerSegment.REGULAR, is_first_time=False, name="Test Customer", **kwargs):
        customer = Customer(
            name=name,
            email=kwargs.pop("email", "customer@example.com"),
            segment=segment.value,
            is_first_time=is_first_time,
            **kwargs,
        )
        current_domain.repository_for(Customer).add(customer)
        return customer

    return _make
