import pytest

from rocket_arena.session import CLICK, FIRE

from conftest import make_bullet, make_obstacle


def button_center(session):
    left, bottom, w, h = session.restart_button_rect()
    return left + w / 2, bottom + h / 2


def end_run(session):
    session.game_over = True
    session.score = 40
    session.frame_count = 321
    session.ship.x, session.ship.y = 100, 120
    session.ship.vx, session.ship.vy = 2.0, -1.0
    session.bullets = [make_bullet(300, 300)]
    session.obstacles = [make_obstacle(500, 400)]


def test_press_fires_toward_pointer(session, controls):
    s = session.ship
    controls.pointer_down(s.x + 100, s.y)

    events = session.step(0.0, controls)

    assert events == [FIRE]
    assert len(session.bullets) == 1
    bullet = session.bullets[0]
    assert bullet.vx == pytest.approx(8.0)
    assert bullet.vy == pytest.approx(0.0, abs=1e-9)


def test_fire_cooldown(session, controls):
    x, y = session.ship.x, session.ship.y + 50

    controls.pointer_down(x, y)
    session.step(0.0, controls)
    controls.pointer_down(x, y)
    session.step(0.1, controls)
    assert len(session.bullets) == 1

    controls.pointer_down(x, y)
    session.step(0.16, controls)
    assert len(session.bullets) == 2
    assert session.shots == 2


def test_secondary_button_does_not_fire(session, controls):
    controls.pointer_down(500, 300, primary=False)
    session.step(0.0, controls)
    assert session.bullets == []


def test_no_firing_while_game_over(session, controls):
    end_run(session)
    controls.pointer_down(10, 10)
    session.step(1.0, controls)
    assert len(session.bullets) == 1
    assert not session.restart_pressed


def test_restart_after_button_delay(session, controls):
    end_run(session)

    controls.pointer_down(*button_center(session))
    events = session.step(1.0, controls)
    assert events == [CLICK]
    assert session.restart_pressed
    assert session.game_over

    session.step(1.1, controls)
    assert session.game_over
    assert session.score == 40

    session.step(1.2, controls)
    assert not session.game_over
    assert not session.restart_pressed
    assert session.score == 0
    assert session.frame_count == 0
    assert (session.ship.x, session.ship.y) == (400, 300)
    assert (session.ship.vx, session.ship.vy) == (0.0, 0.0)
    assert session.bullets == []
    assert session.obstacles == []

    session.step(1.25, controls)
    assert session.frame_count == 1


def test_press_outside_button_is_ignored(session, controls):
    end_run(session)
    left, bottom, w, h = session.restart_button_rect()
    controls.pointer_down(left - 5, bottom + h / 2)

    events = session.step(1.0, controls)

    assert events == []
    assert not session.restart_pressed
    session.step(2.0, controls)
    assert session.game_over


def test_presses_while_restart_pending_are_ignored(session, controls):
    end_run(session)
    center = button_center(session)

    controls.pointer_down(*center)
    session.step(1.0, controls)
    controls.pointer_down(*center)
    events = session.step(1.05, controls)

    assert events == []
    assert session.restart_pending


def test_restart_keeps_stars(session):
    stars = list(session.stars)
    end_run(session)
    session.restart()
    assert session.stars == stars
