"""Tests for parameter and property inference."""

from doctree_core.comments import CodeParam, Entity
from doctree_core.infer import infer_params, infer_properties
from tests.support.helpers import make_comment, tag


def _entity(**kwargs) -> Entity:
    return Entity.from_comment(make_comment(**kwargs), 0)


class TestInferParams:
    """Test infer_params tag reading and signature merging."""

    def test_params_from_tags_in_order(self):
        """Documented params keep tag order."""
        entity = infer_params(_entity(tags=(tag("param", name="a", type="string"), tag("param", name="b", description="second"))))
        assert [(p.name, p.type, p.description) for p in entity.params] == [("a", "string", ""), ("b", None, "second")]

    def test_optional_marker_in_type(self):
        """A trailing ``=`` in the type marks the param optional."""
        (param,) = infer_params(_entity(tags=(tag("param", name="x", type="number="),))).params
        assert param.optional is True
        assert param.type == "number"

    def test_rest_marker_in_type(self):
        """A leading ``...`` in the type marks the param variadic."""
        (param,) = infer_params(_entity(tags=(tag("param", name="xs", type="...number"),))).params
        assert param.rest is True
        assert param.type == "number"

    def test_default_makes_param_optional(self):
        (param,) = infer_params(_entity(tags=(tag("param", name="x", default="1"),))).params
        assert param.optional is True
        assert param.default == "1"

    def test_declared_params_merge_with_tags(self):
        """Signature order first, then documented-only params; defaults come from code."""
        entity = infer_params(
            _entity(
                tags=(tag("param", name="b", description="documented"), tag("param", name="extra")),
                params=(CodeParam(name="a"), CodeParam(name="b", default="2"), CodeParam(name="rest", rest=True)),
            )
        )
        assert [p.name for p in entity.params] == ["a", "b", "rest", "extra"]
        b = entity.params[1]
        assert b.description == "documented"
        assert b.default == "2"
        assert b.optional is True
        assert entity.params[2].rest is True

    def test_dotted_params_nest_under_parent(self):
        """``options.depth`` becomes a property of ``options``, at any depth."""
        entity = infer_params(
            _entity(
                tags=(
                    tag("param", name="options", type="Object"),
                    tag("param", name="options.depth", type="number"),
                    tag("param", name="options.deep.flag"),
                    tag("param", name="options.deep"),
                )
            )
        )
        (options,) = entity.params
        assert [p.name for p in options.properties] == ["options.depth", "options.deep"]
        assert [p.name for p in options.properties[1].properties] == ["options.deep.flag"]
        assert entity.errors == ()

    def test_array_parent_name(self):
        """``employees[].name`` nests under ``employees``."""
        entity = infer_params(_entity(tags=(tag("param", name="employees", type="Array"), tag("param", name="employees[].name"))))
        assert [p.name for p in entity.params[0].properties] == ["employees[].name"]

    def test_orphan_dotted_param_stays_top_level_with_error(self):
        entity = infer_params(_entity(tags=(tag("param", name="options.depth"),)))
        assert [p.name for p in entity.params] == ["options.depth"]
        assert entity.errors == ("parameter 'options.depth' found without its parent 'options'",)

    def test_malformed_type_keeps_param_without_type(self):
        """Only the type is dropped when its expression is unbalanced."""
        entity = infer_params(_entity(tags=(tag("param", name="x", type="Array<number"),)))
        assert entity.params[0].name == "x"
        assert entity.params[0].type is None
        assert len(entity.errors) == 1

    def test_param_without_name_is_skipped(self):
        entity = infer_params(_entity(tags=(tag("param", type="string"), tag("param", name="ok"))))
        assert [p.name for p in entity.params] == ["ok"]
        assert entity.errors == ("@param is missing 'name'",)

    def test_no_params_leaves_entity_untouched(self):
        entity = _entity()
        assert infer_params(entity) is entity


class TestInferProperties:
    """Test infer_properties."""

    def test_properties_from_tags_with_nesting(self):
        """Property tags nest by dotted name and honour the optional marker."""
        entity = infer_properties(
            _entity(
                tags=(
                    tag("property", name="size", type="number"),
                    tag("prop", name="size.unit", type="string="),
                )
            )
        )
        (size,) = entity.properties
        assert size.type == "number"
        (unit,) = size.properties
        assert unit.optional is True
        assert unit.type == "string"

    def test_duplicate_property_keeps_first(self):
        entity = infer_properties(_entity(tags=(tag("property", name="a", type="string"), tag("property", name="a", type="number"))))
        assert [(p.name, p.type) for p in entity.properties] == [("a", "string")]
        assert entity.errors == ("property 'a' is documented more than once",)
