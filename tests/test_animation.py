import numpy as np
import pytest

from animation import AnimationDriver, AnimationState


def test_mount_starts_running_and_schedules_a_frame(make_host, rng):
    host = make_host(1000, 600)
    driver = AnimationDriver(host, rng=rng)

    assert driver.state is AnimationState.UNMOUNTED
    driver.mount()

    assert driver.state is AnimationState.RUNNING
    assert driver.is_running
    assert driver.particles.particle_count == 50
    assert (driver.width, driver.height) == (1000, 600)
    assert len(host.pending) == 1
    assert host.resize_listeners == [driver._handle_resize]
    assert driver.frame_count == 0


def test_particle_count_capped_for_wide_viewport(make_host, rng):
    host = make_host(3000, 600)
    driver = AnimationDriver(host, rng=rng)

    driver.mount()

    assert driver.particles.particle_count == 80


def test_each_tick_runs_one_frame_and_reschedules(make_host, rng):
    host = make_host(400, 300)
    driver = AnimationDriver(host, rng=rng)
    driver.mount()
    start = driver.particles.positions.copy()

    host.tick(3)

    assert driver.frame_count == 3
    assert len(host.pending) == 1
    moved = np.abs(driver.particles.positions - start)
    assert np.all(moved <= 3 * 0.25 + 1e-9)
    assert np.any(moved > 0)


def test_unmount_freezes_particles(make_host, rng):
    host = make_host(400, 300)
    driver = AnimationDriver(host, rng=rng)
    driver.mount()
    host.tick(5)
    particles = driver.particles
    handle = next(iter(host.pending))

    driver.unmount()
    frozen = particles.positions.copy()
    host.tick(10)

    assert driver.state is AnimationState.STOPPED
    assert driver.frame_count == 5
    assert host.pending == {}
    assert host.cancelled_frames == [handle]
    assert host.resize_listeners == []
    np.testing.assert_array_equal(particles.positions, frozen)


def test_unmount_is_idempotent(make_host, rng):
    host = make_host(400, 300)
    driver = AnimationDriver(host, rng=rng)
    driver.mount()

    driver.unmount()
    driver.unmount()

    assert host.removed_listeners == 1
    assert len(host.cancelled_frames) == 1


def test_stale_frame_callback_is_ignored_after_unmount(make_host, rng):
    host = make_host(400, 300)
    driver = AnimationDriver(host, rng=rng)
    driver.mount()
    callback = next(iter(host.pending.values()))

    driver.unmount()
    callback()

    assert driver.frame_count == 0
    assert host.pending == {}


def test_unavailable_surface_declines_to_start(make_host, rng):
    host = make_host(surface_available=False)
    driver = AnimationDriver(host, rng=rng)

    driver.mount()

    assert driver.state is AnimationState.STOPPED
    assert driver.particles is None
    assert host.pending == {}
    assert host.resize_listeners == []

    driver.unmount()
    assert host.removed_listeners == 0
    assert host.cancelled_frames == []


def test_zero_dimension_surface_runs_empty_frames(make_host, rng):
    host = make_host(0, 0)
    driver = AnimationDriver(host, rng=rng)

    driver.mount()
    host.tick(4)

    assert driver.state is AnimationState.RUNNING
    assert driver.particles.particle_count == 0
    assert driver.frame_count == 4


def test_resize_keeps_particle_store(make_host, rng):
    host = make_host(1000, 600)
    driver = AnimationDriver(host, rng=rng)
    driver.mount()
    particles = driver.particles

    host.resize(400, 200)
    host.tick()

    assert (driver.width, driver.height) == (400, 200)
    assert driver.particles is particles
    assert particles.particle_count == 50
    assert driver.surface is host.surface
    assert driver.renderer.size == (400, 200)


def test_mount_twice_raises(make_host, rng):
    host = make_host()
    driver = AnimationDriver(host, rng=rng)
    driver.mount()

    with pytest.raises(RuntimeError):
        driver.mount()


def test_remount_after_stop_raises(make_host, rng):
    host = make_host()
    driver = AnimationDriver(host, rng=rng)
    driver.mount()
    driver.unmount()

    with pytest.raises(RuntimeError):
        driver.mount()


def test_independent_drivers_do_not_interfere(make_host):
    host = make_host(400, 300)
    first = AnimationDriver(host, rng=np.random.default_rng(1))
    second = AnimationDriver(host, rng=np.random.default_rng(2))
    first.mount()
    second.mount()

    host.tick(2)
    first.unmount()
    host.tick(2)

    assert first.frame_count == 2
    assert second.frame_count == 4
    assert first.particles is None
    assert second.particles.particle_count == 20
    assert host.resize_listeners == [second._handle_resize]


def test_frames_paint_the_surface(make_host, rng):
    host = make_host(200, 200)
    host.surface.fill((255, 255, 255))
    driver = AnimationDriver(host, rng=rng)
    driver.mount()

    host.tick()

    assert host.surface.get_at((0, 0)).r < 255
