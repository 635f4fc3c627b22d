import io

import pytest

from onos_cli.topo.objects import Aspect
from onos_cli.uenib.ues import (
    UE,
    UEEvent,
    UEEventType,
    create_ue,
    delete_ue,
    get_ue,
    list_ues,
    print_header,
    print_ue,
    print_update_type,
    update_ue,
    watch_ues,
)


class FakeClient:
    def __init__(self, ues=(), events=(), error=None, stream_error=None):
        self.ues = list(ues)
        self.events = list(events)
        self.error = error
        self.stream_error = stream_error
        self.calls = []

    def _check(self):
        if self.error is not None:
            raise self.error

    def create_ue(self, ue):
        self.calls.append(("create", ue))
        self._check()

    def update_ue(self, ue):
        self.calls.append(("update", ue))
        self._check()

    def delete_ue(self, ue_id, aspect_types):
        self.calls.append(("delete", ue_id, aspect_types))
        self._check()

    def get_ue(self, ue_id, aspect_types):
        self.calls.append(("get", ue_id, aspect_types))
        self._check()
        return next(ue for ue in self.ues if ue.id == ue_id)

    def list_ues(self, aspect_types):
        self.calls.append(("list", aspect_types))
        self._check()
        return self._stream(self.ues)

    def watch_ues(self, aspect_types, no_replay):
        self.calls.append(("watch", aspect_types, no_replay))
        self._check()
        return self._stream(self.events)

    def _stream(self, items):
        yield from items
        if self.stream_error is not None:
            raise self.stream_error


def make_ue(ue_id, **aspects):
    return UE(id=ue_id, aspects={k: Aspect(type_url=k, value=v.encode()) for k, v in aspects.items()})


def test_create_ue_sends_aspects_as_bytes():
    client = FakeClient()
    out = io.StringIO()
    create_ue(client, out, "ue1", {"onos.uenib.CellInfo": '{"x":1}'})
    kind, ue = client.calls[0]
    assert kind == "create"
    assert ue.id == "ue1"
    assert ue.aspects["onos.uenib.CellInfo"].value == b'{"x":1}'
    assert ue.aspects["onos.uenib.CellInfo"].type_url == "onos.uenib.CellInfo"
    assert out.getvalue() == ""


def test_create_ue_reports_error():
    client = FakeClient(error=RuntimeError("boom"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        create_ue(client, out, "ue1", {"a.b": "v"})
    assert out.getvalue() == "Unable to create UE aspects: boom"


def test_update_ue_sends_aspects_and_reports_error():
    client = FakeClient()
    update_ue(client, io.StringIO(), "ue2", {"a.b": "v"})
    assert client.calls[0][0] == "update"
    assert client.calls[0][1].aspects["a.b"].value == b"v"

    failing = FakeClient(error=RuntimeError("nope"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        update_ue(failing, out, "ue2", {"a.b": "v"})
    assert out.getvalue() == "Unable to update UE aspects: nope"


def test_delete_ue_passes_aspect_types():
    client = FakeClient()
    delete_ue(client, io.StringIO(), "ue3", ["a.b", "c.d"])
    assert client.calls == [("delete", "ue3", ["a.b", "c.d"])]


def test_delete_ue_reports_error():
    client = FakeClient(error=RuntimeError("gone"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        delete_ue(client, out, "ue3", [])
    assert out.getvalue() == "Unable to delete UE aspects: gone"


def test_print_header_columns():
    out = io.StringIO()
    print_header(out, False)
    fields = out.getvalue().rstrip("\n").split("\t")
    assert [f.strip() for f in fields] == ["UE ID", "Aspect Types"]
    assert len(fields[0]) == 16

    out = io.StringIO()
    print_header(out, True)
    fields = out.getvalue().rstrip("\n").split("\t")
    assert [f.strip() for f in fields] == ["Event Type", "UE ID", "Aspect Type", "Aspect Value"]
    assert len(fields[0]) == 12


def test_print_ue_plain_and_verbose():
    ue = make_ue("ue1", **{"a.b": "one", "c.d": "two"})
    out = io.StringIO()
    print_ue(out, ue, False)
    first, rest = out.getvalue().split("\t")
    assert first.strip() == "ue1"
    assert len(first) == 16
    assert rest == "a.b,c.d\n"

    out = io.StringIO()
    print_ue(out, ue, True)
    assert out.getvalue() == "ID: ue1\nAspects:\n- a.b=one\n- c.d=two\n"


def test_print_update_type():
    out = io.StringIO()
    print_update_type(out, UEEventType.NONE)
    assert out.getvalue().strip() == "REPLAY"
    out = io.StringIO()
    print_update_type(out, UEEventType.ADDED)
    assert out.getvalue().rstrip("\t").strip() == "ADDED"
    assert len(out.getvalue()) == 13


def test_get_ue_prints_header_and_row():
    client = FakeClient(ues=[make_ue("ue1", **{"a.b": "x"})])
    out = io.StringIO()
    ue = get_ue(client, out, "ue1", ["a.b"])
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("UE ID")
    assert lines[1].endswith("a.b")
    assert ue.id == "ue1"
    assert client.calls == [("get", "ue1", ["a.b"])]


def test_get_ue_verbose_omits_header():
    client = FakeClient(ues=[make_ue("ue1", **{"a.b": "x"})])
    out = io.StringIO()
    get_ue(client, out, "ue1", [], verbose=True)
    assert out.getvalue() == "ID: ue1\nAspects:\n- a.b=x\n"


def test_get_ue_error():
    client = FakeClient(error=RuntimeError("missing"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        get_ue(client, out, "ue1", [], no_headers=True)
    assert out.getvalue() == "Unable to get UE aspects: missing"


def test_list_ues_prints_each():
    client = FakeClient(ues=[make_ue("ue1"), make_ue("ue2")])
    out = io.StringIO()
    list_ues(client, out, [], no_headers=True)
    rows = [line.split("\t")[0].strip() for line in out.getvalue().splitlines()]
    assert rows == ["ue1", "ue2"]


def test_list_ues_stream_error():
    client = FakeClient(ues=[make_ue("ue1")], stream_error=RuntimeError("cut"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        list_ues(client, out, [], no_headers=True)
    assert out.getvalue().endswith("Unable to read UE: cut")
    assert out.getvalue().startswith("ue1")


def test_watch_ues_filters_by_id():
    events = [
        UEEvent(UEEventType.NONE, make_ue("ue1", **{"a.b": "x"})),
        UEEvent(UEEventType.ADDED, make_ue("ue2")),
        UEEvent(UEEventType.UPDATED, make_ue("ue1")),
    ]
    client = FakeClient(events=events)
    out = io.StringIO()
    watch_ues(client, out, "ue1", ["a.b"], no_headers=True, no_replay=True)
    lines = out.getvalue().splitlines()
    assert [line.split("\t")[0].strip() for line in lines] == ["REPLAY", "UPDATED"]
    assert all(line.split("\t")[1].strip() == "ue1" for line in lines)
    assert client.calls == [("watch", ["a.b"], True)]


def test_watch_ues_all_with_header_and_error():
    events = [UEEvent(UEEventType.ADDED, make_ue("ue2"))]
    client = FakeClient(events=events, stream_error=RuntimeError("lost"))
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        watch_ues(client, out)
    text = out.getvalue()
    assert text.startswith("Event Type")
    assert "ue2" in text
    assert text.endswith("Error receiving notification : lost")