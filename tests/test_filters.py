import pytest

from onos_cli.topo.filters import (
    EqualFilter,
    Filter,
    InFilter,
    NotFilter,
    compile_filters,
    compile_kind_filter,
    compile_label_filter,
    compile_label_filters,
    extract_key,
    extract_value,
    extract_values,
)
from onos_cli.topo.objects import ObjectType
from onos_cli.utils import InvalidError


def test_label_equal():
    assert compile_label_filter("env = test") == Filter(EqualFilter("test"), "env")


def test_label_not_equal():
    assert compile_label_filter("env!=test") == Filter(
        NotFilter(Filter(EqualFilter("test"))), "env"
    )


def test_label_in():
    assert compile_label_filter("env in (a, b)") == Filter(InFilter(["a", "b"]), "env")


def test_label_not_in():
    assert compile_label_filter("env !in (a,b)") == Filter(
        NotFilter(Filter(InFilter(["a", "b"]))), "env"
    )


def test_label_without_operator_is_dropped():
    assert compile_label_filter("env") is None


def test_label_filters_joined():
    result = compile_label_filters("a=x && b!=y && c in (p, q)")
    assert [f.key for f in result] == ["a", "b", "c"]
    assert result[2].condition == InFilter(["p", "q"])


def test_empty_label_query():
    assert compile_label_filters("") == []


def test_kind_empty():
    assert compile_kind_filter("") is None


def test_kind_bare_list():
    assert compile_kind_filter("a, b") == Filter(InFilter(["a", "b"]))


def test_kind_not_in():
    assert compile_kind_filter("!in (a, b)") == Filter(NotFilter(Filter(InFilter(["a", "b"]))))


def test_kind_in():
    assert compile_kind_filter("in (a)") == Filter(InFilter(["a"]))


def test_kind_not_equal():
    assert compile_kind_filter("!= a") == Filter(NotFilter(Filter(EqualFilter("a"))))


def test_kind_equal():
    assert compile_kind_filter("= a") == Filter(EqualFilter("a"))


@pytest.mark.parametrize("query", ["(a", "!a", "a)"])
def test_kind_malformed(query):
    assert compile_kind_filter(query) is None


def test_compile_filters_entity_uses_kind():
    filters = compile_filters(ObjectType.ENTITY, "env=test", "somekind")
    assert filters.object_types == [ObjectType.ENTITY]
    assert filters.kind_filter == Filter(InFilter(["somekind"]))
    assert filters.label_filters == [Filter(EqualFilter("test"), "env")]


def test_compile_filters_kind_ignores_kind_query():
    filters = compile_filters(ObjectType.KIND, "", "somekind")
    assert filters.kind_filter is None
    assert filters.label_filters == []


def test_extract_helpers():
    assert extract_key(" k != v", "!=") == "k"
    assert extract_value("k != v") == "v"
    assert extract_values("x in ( a , b )") == ["a", "b"]


def test_extract_value_requires_equals():
    with pytest.raises(InvalidError):
        extract_value("k")


def test_extract_values_requires_paren():
    with pytest.raises(InvalidError):
        extract_values("a, b")