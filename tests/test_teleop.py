import pygame as pg

from swerve_drive.teleop import SCREEN_HEIGHT, SCREEN_WIDTH, compute_inputs_from_keys, field_to_screen


class Keys(dict):
    def __missing__(self, key):
        return False


def test_no_keys_no_motion():
    assert compute_inputs_from_keys(Keys()) == (0.0, 0.0, 0.0)


def test_key_mapping():
    assert compute_inputs_from_keys(Keys({pg.K_w: True, pg.K_q: True})) == (1.0, 0.0, 1.0)
    assert compute_inputs_from_keys(Keys({pg.K_s: True, pg.K_d: True, pg.K_e: True})) == (-1.0, -1.0, -1.0)
    assert compute_inputs_from_keys(Keys({pg.K_a: True, pg.K_d: True})) == (0.0, 0.0, 0.0)


def test_field_to_screen():
    assert field_to_screen(0, 0) == (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
    x, y = field_to_screen(10, 10)
    assert x > SCREEN_WIDTH // 2
    assert y < SCREEN_HEIGHT // 2
