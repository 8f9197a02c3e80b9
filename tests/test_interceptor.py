from turnout.domain.types import MaintenanceResponse, RequestView
from turnout.maintenance.interceptor import Interceptor


class RecordingApp:
    def __init__(self) -> None:
        self.calls: list[RequestView] = []
        self.response = object()

    def __call__(self, view: RequestView):
        self.calls.append(view)
        return self.response


def test_passes_through_when_settings_file_is_absent(tmp_path):
    app = RecordingApp()
    view = RequestView(path="/orders", client_host="192.168.1.1", accept="text/html")

    result = Interceptor(tmp_path).handle(view, app)

    assert result is app.response
    assert app.calls == [view]


def test_blocks_with_default_page_when_file_is_empty(tmp_path, write_settings):
    write_settings("")
    app = RecordingApp()

    result = Interceptor(tmp_path).handle(RequestView(path="/"), app)

    assert isinstance(result, MaintenanceResponse)
    assert result.status_code == 503
    assert result.content_type == "text/html"
    assert app.calls == []


def test_allowed_path_passes_through_for_json_client(tmp_path, write_settings):
    write_settings("allowed_paths: ['^/health$']\n")
    app = RecordingApp()

    result = Interceptor(tmp_path).handle(RequestView(path="/health", accept="application/json"), app)

    assert result is app.response


def test_allowed_network_passes_through(tmp_path, write_settings):
    write_settings("allowed_ips: ['10.0.0.0/8']\n")
    interceptor = Interceptor(tmp_path)
    app = RecordingApp()

    assert interceptor.handle(RequestView(path="/", client_host="10.1.2.3"), app) is app.response
    blocked = interceptor.handle(RequestView(path="/", client_host="192.168.1.1"), app)
    assert isinstance(blocked, MaintenanceResponse)
    assert len(app.calls) == 1


def test_toggling_takes_effect_on_next_request(tmp_path, write_settings):
    interceptor = Interceptor(tmp_path)
    view = RequestView(path="/")

    assert interceptor.intercept(view) is None
    settings_file = write_settings("reason: upgrade\n")
    assert interceptor.intercept(view) is not None
    settings_file.unlink()
    assert interceptor.intercept(view) is None


def test_reason_change_is_picked_up_without_restart(tmp_path, write_settings):
    interceptor = Interceptor(tmp_path)
    view = RequestView(path="/", accept="application/json")

    write_settings("reason: first\n")
    assert b'"first"' in interceptor.intercept(view).body
    write_settings("reason: second\n")
    assert b'"second"' in interceptor.intercept(view).body


def test_identical_requests_get_identical_responses(tmp_path, write_settings):
    write_settings("reason: '<b>down</b>'\n")
    interceptor = Interceptor(tmp_path)
    view = RequestView(path="/", accept="text/html")

    assert interceptor.intercept(view) == interceptor.intercept(view)
