from starfield import main as app_main


def test_parse_args_defaults():
    args = app_main.parse_args([])
    assert args.seed is None
    assert args.backend is None
    assert not args.controls
    assert app_main.build_params(args) == {"system": {"transparent": True}}


def test_fps_becomes_frame_interval():
    args = app_main.parse_args(["--fps", "30", "--opaque", "--seed", "4"])
    assert args.seed == 4
    assert app_main.build_params(args) == {"system": {"transparent": False, "frameIntervalMs": 33}}


def test_headless_main_returns_zero():
    assert app_main.main(["--debug"], headless=True) == 0


def test_debug_silencer_filters_marker_lines():
    class Sink:
        def __init__(self):
            self.chunks = []

        def write(self, text):
            self.chunks.append(text)

        def flush(self):
            pass

    sink = Sink()
    stream = app_main._DebugSilencer(sink, app_main.DEBUG_MARKER)
    stream.write("[Starfield][DEBUG] pool 80 particles\nvisible line\n")
    stream.write("tail")
    stream.flush()
    assert "".join(sink.chunks) == "visible line\ntail"


def test_debug_silencer_recognises_split_marker():
    class Sink:
        def __init__(self):
            self.chunks = []

        def write(self, text):
            self.chunks.append(text)

        def flush(self):
            pass

    sink = Sink()
    stream = app_main._DebugSilencer(sink, app_main.DEBUG_MARKER)
    stream.write("[Starfield]")
    stream.write("[DEBUG] paused\nkept\n")
    assert "".join(sink.chunks) == "kept\n"
