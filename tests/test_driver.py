from matrixsaver.config import RenderConfig
from matrixsaver.driver import AnimationDriver, RenderCell
from matrixsaver.column import ColumnState


def rows_and_distances(cells, head):
    return sorted((c.row, head - c.row) for c in cells)


def test_single_column_scenario(binary_config, rng, surface):
    driver = AnimationDriver(binary_config, surface, rng)
    driver.resize(10, 30, 10, 10)
    assert (driver.column_count, driver.row_count) == (1, 3)
    column = driver.grid[0]
    assert column.head_row == -1
    head_style = binary_config.head_style

    cells = driver.tick(0.05)
    assert column.head_row == 0
    assert cells == [RenderCell(0, 0, column.slots[0], head_style)]

    cells = driver.tick(0.05)
    assert column.head_row == 1
    assert rows_and_distances(cells, 1) == [(0, 1), (1, 0)]
    assert cells[-1].style == head_style
    assert cells[0].style.brightness < head_style.brightness

    cells = driver.tick(0.05)
    assert column.head_row == 2
    assert rows_and_distances(cells, 2) == [(0, 2), (1, 1), (2, 0)]
    by_row = {c.row: c.style for c in cells}
    assert by_row[0].brightness < by_row[1].brightness < by_row[2].brightness

    driver.tick(0.05)
    assert column.state is ColumnState.DRAINING
    assert len(surface.frames) == 4
    assert driver.frames == 4
    assert abs(driver.elapsed - 0.2) < 1e-9


def test_finished_column_resets_next_tick(binary_config, rng):
    driver = AnimationDriver(binary_config, rng=rng)
    driver.resize(10, 30, 10, 10)
    column = driver.grid[0]
    while column.state is not ColumnState.FINISHED:
        driver.tick()
    assert driver.tick() == []
    assert column.head_row < 0
    assert column.state is ColumnState.EMPTY


def test_cells_stay_inside_fade_window(rng):
    config = RenderConfig(fade_length_range=(1, 10), speed_range=(1, 3), flicker_chance=0.1)
    driver = AnimationDriver(config, rng=rng)
    driver.resize(800, 600, 10, 20)
    for _ in range(300):
        cells = driver.tick()
        for cell in cells:
            column = driver.grid[cell.column]
            assert 0 <= column.head_row - cell.row <= column.fade_length
            assert 0 <= cell.row < driver.row_count
            assert cell.glyph in config.glyph_set


def test_resize_is_repeatable(rng):
    driver = AnimationDriver(RenderConfig(), rng=rng)
    driver.resize(1024.0, 768.0, 12.0, 20.0)
    first = (driver.column_count, driver.row_count)
    driver.resize(1024.0, 768.0, 12.0, 20.0)
    assert (driver.column_count, driver.row_count) == first == (85, 38)


def test_reset_columns(rng):
    driver = AnimationDriver(RenderConfig(max_stagger=5), rng=rng)
    driver.resize(200, 200, 10, 10)
    for _ in range(40):
        driver.tick()
    driver.reset_columns()
    assert all(c.state is ColumnState.EMPTY for c in driver.grid)
    assert all(-5 <= c.head_row < 0 for c in driver.grid)
    for _ in range(100):
        driver.tick()
    assert driver.error is None


def test_empty_glyph_set_degrades(rng, surface, capsys):
    driver = AnimationDriver(RenderConfig(glyph_set=()), surface, rng)
    assert driver.error is not None
    assert "[ERROR]" in capsys.readouterr().out
    driver.resize(800, 600, 10, 10)
    assert driver.column_count == 0
    assert driver.tick() == []
    driver.reset_columns()
    assert surface.frames == []


def test_bad_metrics_degrade(binary_config, rng, surface, capsys):
    driver = AnimationDriver(binary_config, surface, rng)
    driver.resize(800, 600, 0, 10)
    assert driver.column_count == 0
    assert driver.error is not None
    assert "[ERROR]" in capsys.readouterr().out
    assert driver.tick() == []
    assert surface.frames == []

    driver.resize(800, 600, 10, 10)
    assert driver.error is None
    assert driver.column_count == 80


def test_zero_surface_is_a_noop(binary_config, rng, surface):
    driver = AnimationDriver(binary_config, surface, rng)
    driver.resize(0, 0, 10, 10)
    assert driver.column_count == 0
    assert driver.error is None
    assert driver.tick() == []
    assert surface.frames == []


def test_tick_before_resize_is_a_noop(binary_config, rng):
    driver = AnimationDriver(binary_config, rng=rng)
    assert driver.tick() == []
