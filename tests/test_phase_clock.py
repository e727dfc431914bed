from round_timer.core.phase_clock import has_elapsed, remaining


def test_remaining_floors_elapsed_seconds() -> None:
    assert remaining(0.0, 180, 0.0) == 180
    assert remaining(0.0, 180, 0.9) == 180
    assert remaining(0.0, 180, 100.0) == 80
    assert remaining(10.0, 60, 69.5) == 1


def test_remaining_never_negative() -> None:
    assert remaining(0.0, 60, 60.0) == 0
    assert remaining(0.0, 60, 1000.0) == 0


def test_remaining_is_non_increasing() -> None:
    values = [remaining(5.0, 30, 5.0 + step * 0.25) for step in range(200)]
    assert all(later <= earlier for earlier, later in zip(values, values[1:]))


def test_clock_stepping_back_counts_as_no_time() -> None:
    assert remaining(100.0, 60, 90.0) == 60


def test_has_elapsed_at_boundary() -> None:
    assert has_elapsed(0.0, 180, 179.99) is False
    assert has_elapsed(0.0, 180, 180.0) is True
    assert has_elapsed(20.0, 80, 500.0) is True
