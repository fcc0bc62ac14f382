from typing import Optional


def validate_block_range(range_start_incl: int, range_end_incl: Optional[int]) -> None:
    """
    Validate a block range to relay. An open range (no end) follows the chain head.

    Raises:
        ValueError: If the block range is invalid.
    """
    validate_block_number(range_start_incl)
    if range_end_incl is None:
        return
    validate_block_number(range_end_incl)

    if range_end_incl < range_start_incl:
        raise ValueError(
            f"range_end ({range_end_incl}) must be greater than or equal to range_start ({range_start_incl})"
        )


def validate_block_number(block_number: int) -> None:
    if block_number < 0:
        raise ValueError(f"Block number must be greater than or equal to 0, got {block_number}")
