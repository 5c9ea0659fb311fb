import pytest

pygame = pytest.importorskip("pygame")

from core.types import LabelPlacement, Viewport  # noqa: E402
from game.session import OrrerySession  # noqa: E402
from rendering.scene_renderer import SceneRenderer, make_glow_surface, make_starfield  # noqa: E402
from ui.components import Button, Slider  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def display():
    pygame.init()
    pygame.display.set_mode((320, 240))
    yield
    pygame.quit()


def _click(kind, pos):
    return pygame.event.Event(kind, button=1, pos=pos)


# ---------------------------------------------------------------------------
# Widgets
# ---------------------------------------------------------------------------

def test_slider_snaps_to_step():
    slider = Slider(0, 0, 100, 14, 0.0, 0.1, 0.001, 0.02345)
    assert slider.value == 0.023
    slider.set_value(5.0)
    assert slider.value == 0.1
    slider.set_value(-1.0)
    assert slider.value == 0.0


def test_slider_reports_user_changes():
    changes = []
    slider = Slider(0, 0, 100, 14, 0.0, 0.1, 0.001, 0.02, on_change=changes.append)
    assert slider.handle_event(_click(pygame.MOUSEBUTTONDOWN, (50, 7)))
    assert slider.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(250, 7)))
    assert slider.handle_event(_click(pygame.MOUSEBUTTONUP, (250, 7)))
    assert changes == [0.05, 0.1]
    assert not slider.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(10, 7)))


def test_slider_ignores_clicks_elsewhere():
    slider = Slider(0, 0, 100, 14, 0.0, 0.1, 0.001, 0.02)
    assert not slider.handle_event(_click(pygame.MOUSEBUTTONDOWN, (50, 200)))
    assert slider.value == 0.02


def test_button_fires_on_release_inside():
    clicks = []
    button = Button(10, 10, 80, 30, "PLAY", callback=lambda: clicks.append(1))
    button.handle_event(_click(pygame.MOUSEBUTTONDOWN, (20, 20)))
    button.handle_event(_click(pygame.MOUSEBUTTONUP, (200, 200)))
    assert clicks == []
    button.handle_event(_click(pygame.MOUSEBUTTONDOWN, (20, 20)))
    button.handle_event(_click(pygame.MOUSEBUTTONUP, (25, 25)))
    assert clicks == [1]


# ---------------------------------------------------------------------------
# Scene renderer
# ---------------------------------------------------------------------------

def test_starfield_shape_and_extent():
    stars = make_starfield(500, 2000.0, seed=1)
    assert stars.shape == (500, 3)
    assert abs(stars).max() <= 1000.0


def test_glow_is_brightest_in_the_middle():
    glow = make_glow_surface(32, (255, 170, 0))
    centre = glow.get_at((16, 16))
    corner = glow.get_at((0, 0))
    assert centre.r > corner.r
    assert tuple(corner)[:3] == (0, 0, 0)


@pytest.fixture
def small_session(two_body_system):
    from core.config import OrreryConfig
    return OrrerySession(OrreryConfig(width=320, height=240, seed=2), system=two_body_system)


def test_render_draws_central_body(small_session):
    surface = pygame.Surface((320, 240))
    renderer = SceneRenderer(star_count=300, seed=1)
    small_session.advance()
    renderer.render(surface, small_session.system, small_session.camera,
                    small_session.viewport)
    assert tuple(surface.get_at((160, 120)))[:3] == (255, 221, 0)


def test_render_degenerate_viewport_is_blank(small_session):
    surface = pygame.Surface((320, 240))
    surface.fill((9, 9, 9))
    SceneRenderer(star_count=10).render(surface, small_session.system,
                                        small_session.camera, Viewport(0, 0))
    assert tuple(surface.get_at((160, 120)))[:3] == (0, 0, 0)


def test_labels_skip_hidden_placements():
    surface = pygame.Surface((320, 240))
    renderer = SceneRenderer(star_count=0)
    renderer.draw_labels(surface, [LabelPlacement("Mars", 100.0, 200.0, False)])
    assert pygame.surfarray.array3d(surface).max() == 0
    renderer.draw_labels(surface, [LabelPlacement("Mars", 100.0, 200.0, True)])
    assert pygame.surfarray.array3d(surface).max() > 0


# ---------------------------------------------------------------------------
# Orrery screen
# ---------------------------------------------------------------------------

@pytest.fixture
def screen(small_session):
    from ui.screen_orrery import OrreryScreen
    return OrreryScreen(small_session)


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="")


def test_space_toggles_playback(screen):
    screen.handle_input([_key(pygame.K_SPACE)])
    assert screen.session.playback.paused
    assert screen.play_button.text == "PLAY"


def test_label_and_settings_keys(screen):
    state = screen.session.state
    screen.handle_input([_key(pygame.K_l), _key(pygame.K_s)])
    assert not state.show_labels
    assert state.settings_open
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) is None
    assert not state.settings_open
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) == 'QUIT'


def test_slider_sends_spin_rate(screen):
    screen.session.state.settings_open = True
    slider = screen.sliders["Mars"]
    pos = (slider.rect.right, slider.rect.centery)
    screen.handle_input([_click(pygame.MOUSEBUTTONDOWN, pos),
                         _click(pygame.MOUSEBUTTONUP, pos)])
    assert screen.session.system.pending_updates == 1
    screen.update(1 / 60)
    assert screen.session.system.get("Mars").spin_rate == 0.1
    assert screen.value_labels["Mars"].text == "0.100"


def test_render_frame_and_resize(screen):
    screen.update(1 / 60)
    screen.render(pygame.Surface((320, 240)))
    screen.render(pygame.Surface((400, 300)))
    assert screen.session.viewport == Viewport(400, 300)
