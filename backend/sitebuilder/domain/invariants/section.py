from sitebuilder.domain.errors import ContentValidationError, InvariantViolation
from sitebuilder.domain.section_types import validate


def assert_section_orders(sections):
    orders = [section.order for section in sections]
    if len(orders) != len(set(orders)):
        raise InvariantViolation(
            f"Section orders must be distinct within a site: {sorted(orders)}"
        )


def assert_section(section):
    errors = validate(section.type, section.content)
    if errors:
        raise ContentValidationError(errors)
