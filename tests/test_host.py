from game.collector.entities import Enemy
from game.collector.host import FrameDriver, game_over_message
from game.collector.session import Session, InputState, MAX_HEALTH

from .conftest import make_item


def finish(session):
    session.health = 10
    session.enemies.append(Enemy(x=400, y=300, target=session.avatar))


def test_running_frames_tick_the_session(session):
    driver = FrameDriver(session)
    assert driver.advance(0, InputState(right=True)) is None
    assert driver.snapshot.avatar.x == 405


def test_game_over_is_announced_once(session):
    driver = FrameDriver(session)
    session.collectibles.append(make_item(400, 300, "epic"))
    driver.advance(0, InputState())
    finish(session)
    driver.advance(0, InputState())
    assert session.is_game_over()

    message = driver.advance(16, InputState())
    assert message == "Game Over! Final Score: 100, Collected: 1"
    assert message == game_over_message(driver.snapshot)

    for _ in range(5):
        assert driver.advance(16, InputState(left=True)) is None
    assert driver.snapshot.avatar.x == 400


def test_restart_only_after_game_over(session):
    driver = FrameDriver(session)
    driver.advance(0, InputState(down=True))

    assert not driver.restart()
    assert session.avatar.y == 305

    finish(session)
    driver.advance(0, InputState())
    driver.advance(0, InputState())

    assert driver.restart()
    assert not session.is_game_over()
    assert driver.snapshot.health == MAX_HEALTH
    assert driver.snapshot.score == 0
    assert (driver.snapshot.avatar.x, driver.snapshot.avatar.y) == (400, 300)


def test_next_game_over_is_announced_again():
    driver = FrameDriver(Session(rng=lambda: 0.0))
    for _ in range(2):
        finish(driver.session)
        driver.advance(0, InputState())
        assert driver.advance(0, InputState()) is not None
        assert driver.restart()
