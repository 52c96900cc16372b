from ..exceptions import InvariantViolation


def assert_version_sequence(page_id, numbers):
    """
    Version numbers of a page are exactly 1..k. A gap or duplicate means
    two writers interleaved and the log can no longer be trusted.
    """
    if sorted(numbers) != list(range(1, len(numbers) + 1)):
        raise InvariantViolation(
            f"Version numbers for page {page_id} are not consecutive from 1: {sorted(numbers)}"
        )
