from emitter.bus import EventEmitter


def make_listener(log, name):
    def listener(*args):
        log.append(name)
    return listener


def test_off_namespace_removes_only_tagged_listener():
    ee = EventEmitter()
    log = []
    ee.on("x.ns1", make_listener(log, "ns1"))
    ee.on("x.ns2", make_listener(log, "ns2"))

    ee.off("x.ns1")
    ee.emit("x")

    assert log == ["ns2"]
    assert not ee.has("x.ns1")
    assert ee.has("x.ns2")


def test_off_namespace_keeps_untagged_listeners():
    ee = EventEmitter()
    log = []
    ee.on("x", make_listener(log, "plain"))
    ee.on("x.ns", make_listener(log, "tagged"))
    ee.off("x.ns")
    ee.emit("x")
    assert log == ["plain"]


def test_off_namespace_scoped_to_event_name():
    ee = EventEmitter()
    log = []
    ee.on("x.ns", make_listener(log, "x"))
    ee.on("y.ns", make_listener(log, "y"))
    ee.off("x.ns")
    ee.emit("x").emit("y")
    assert log == ["y"]
    assert ee.has(".ns")


def test_off_bare_namespace_spans_events():
    ee = EventEmitter()
    log = []
    ee.on("x.ns", make_listener(log, "x"))
    ee.on("y.ns", make_listener(log, "y"))
    ee.on("y.other", make_listener(log, "other"))
    ee.off(".ns")
    ee.emit("x").emit("y")
    assert log == ["other"]
    assert not ee.has(".ns")
    assert ee.has(".other")


def test_off_with_callback_and_namespace():
    ee = EventEmitter()
    log = []
    fn = make_listener(log, "fn")
    ee.on("x.ns", fn)

    ee.off("x.other", fn)
    assert ee.has("x", fn)

    ee.off("x.ns", fn)
    assert not ee.has("x", fn)
    assert not ee.has(".ns")


def test_plain_off_with_callback_cleans_namespace_index():
    ee = EventEmitter()
    fn = make_listener([], "fn")
    ee.on("x.ns", fn)
    ee.off("x", fn)
    assert not ee.has(".ns")
    assert ee.listener_count() == 0


def test_emit_with_namespace_filters_listeners():
    ee = EventEmitter()
    log = []
    ee.on("x", make_listener(log, "plain"))
    ee.on("x.ns", make_listener(log, "tagged"))
    ee.emit("x.ns")
    assert log == ["tagged"]
    ee.emit("x")
    assert log == ["tagged", "plain", "tagged"]


def test_namespace_off_during_dispatch_skips_tagged_listener():
    ee = EventEmitter()
    log = []

    def first():
        log.append("first")
        ee.off("x.ns")
        # the namespace index is updated at once, even while firing
        assert not ee.has(".ns")

    ee.on("x", first)
    ee.on("x.ns", make_listener(log, "tagged"))
    ee.on("x", make_listener(log, "plain"))
    ee.emit("x")
    ee.emit("x")

    assert log == ["first", "plain", "first", "plain"]


def test_off_event_drops_namespace_entries():
    ee = EventEmitter()
    ee.on("x.ns", make_listener([], "a"))
    ee.on("y.ns", make_listener([], "b"))
    ee.off("x")
    assert ee.listener_count(".ns") == 1
    assert ee.has("y.ns")


def test_once_with_namespace():
    ee = EventEmitter()
    log = []
    ee.once("x.ns", make_listener(log, "once"))
    ee.emit("x").emit("x")
    assert log == ["once"]
    assert not ee.has(".ns")
