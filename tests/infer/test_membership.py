"""Tests for membership inference and lends directives."""

from doctree_core.comments import Entity, Scope, SyntaxOwner
from doctree_core.infer import (
    SIGNAL_PRIORITY,
    MembershipCandidate,
    MembershipSource,
    collect_lends,
    infer_membership,
    rank_candidates,
)
from tests.support.helpers import make_comment, tag


def _resolve(comment, lends=None) -> Entity | None:
    return infer_membership(lends)(Entity.from_comment(comment, 0))


class TestRanking:
    """Test the membership signal ranking table."""

    def test_priority_table_orders_sources(self):
        """Explicit tags outrank lends, which outrank syntax."""
        assert (
            SIGNAL_PRIORITY[MembershipSource.EXPLICIT_TAG]
            > SIGNAL_PRIORITY[MembershipSource.LENDS]
            > SIGNAL_PRIORITY[MembershipSource.SYNTACTIC]
        )

    def test_rank_prefers_source_then_depth(self):
        """Source tier decides first; the innermost owner breaks ties."""
        outer = MembershipCandidate(MembershipSource.SYNTACTIC, ("Outer",), depth=0)
        inner = MembershipCandidate(MembershipSource.SYNTACTIC, ("Inner",), depth=1)
        lends = MembershipCandidate(MembershipSource.LENDS, ("Lent",))
        assert rank_candidates([outer, inner]) is inner
        assert rank_candidates([inner, lends, outer]) is lends

    def test_rank_tie_keeps_first(self):
        first = MembershipCandidate(MembershipSource.EXPLICIT_TAG, ("A",))
        second = MembershipCandidate(MembershipSource.EXPLICIT_TAG, ("B",))
        assert rank_candidates([first, second]) is first

    def test_rank_empty(self):
        assert rank_candidates([]) is None


class TestInferMembership:
    """Test owner and scope selection for a single entity."""

    def test_explicit_memberof_defaults_to_static(self):
        """A member without any scope signal is static."""
        entity = _resolve(make_comment("bar", member_of="Foo"))
        assert entity.member_of == "Foo"
        assert entity.scope is Scope.STATIC

    def test_memberof_instance_path(self):
        """A trailing ``#`` means instance scope."""
        entity = _resolve(make_comment("bar", member_of="Foo#"))
        assert (entity.member_of, entity.scope) == ("Foo", Scope.INSTANCE)

    def test_memberof_prototype_path(self):
        """``.prototype`` is the instance alias."""
        entity = _resolve(make_comment("bar", member_of="ns.Foo.prototype"))
        assert (entity.member_of, entity.scope) == ("ns.Foo", Scope.INSTANCE)

    def test_scope_tag_overrides_path_scope(self):
        entity = _resolve(make_comment("bar", member_of="Foo#", scope="inner"))
        assert entity.scope is Scope.INNER

    def test_explicit_tag_beats_syntax(self):
        """@memberof wins over the enclosing construct."""
        comment = make_comment("bar", member_of="Documented", owners=(SyntaxOwner(path="Declared", scope=Scope.INSTANCE),))
        entity = _resolve(comment)
        assert (entity.member_of, entity.scope) == ("Documented", Scope.STATIC)

    def test_innermost_syntactic_owner_wins(self):
        comment = make_comment("bar", owners=(SyntaxOwner(path="Outer"), SyntaxOwner(path="Inner", scope=Scope.INSTANCE)))
        entity = _resolve(comment)
        assert (entity.member_of, entity.scope) == ("Inner", Scope.INSTANCE)

    def test_global_tag_forces_top_level(self):
        """@global overrides an enclosing owner."""
        comment = make_comment("bar", tags=(tag("global"),), owners=(SyntaxOwner(path="Obj"),))
        entity = _resolve(comment)
        assert entity.member_of is None
        assert entity.scope is None

    def test_no_signals_means_top_level(self):
        entity = _resolve(make_comment("bar"))
        assert entity.member_of is None
        assert entity.scope is None

    def test_malformed_memberof_falls_back_to_syntax(self):
        """A @memberof without a name is an error; syntax still places the entity."""
        comment = make_comment("bar", tags=(tag("memberof"),), owners=(SyntaxOwner(path="Obj"),))
        entity = _resolve(comment)
        assert entity.member_of == "Obj"
        assert entity.errors == ("@memberof is missing 'name'",)


class TestLends:
    """Test lends directives."""

    def test_directive_is_dropped(self):
        """The directive comment itself never becomes an entity."""
        assert _resolve(make_comment(tags=(tag("lends", name="Obj.prototype"),), block="b")) is None

    def test_applies_to_same_block_only(self):
        """Lends covers later comments in the same file and block."""
        comments = [
            make_comment("outside", block="b0", line=1),
            make_comment(tags=(tag("lends", name="Obj.prototype"),), block="b1", line=2),
            make_comment("first", block="b1", line=3),
            make_comment("nested", block="b2", line=4),
            make_comment("second", block="b1", line=5),
            make_comment("other_file", block="b1", file="src/other.js", line=6),
        ]
        assert collect_lends(comments) == {2: "Obj.prototype", 4: "Obj.prototype"}

    def test_ignored_outside_a_block(self):
        """Without a parser-reported block, lends does not capture later top-level comments."""
        comments = [
            make_comment(tags=(tag("lends", name="Obj.prototype"),), line=1),
            make_comment("helper", line=3),
            make_comment("method", block="b1", line=5),
        ]
        assert collect_lends(comments) == {}

    def test_target_sets_owner_and_scope(self):
        entity = _resolve(make_comment("method"), lends={0: "Obj.prototype"})
        assert (entity.member_of, entity.scope) == ("Obj", Scope.INSTANCE)

    def test_beats_syntax_but_not_explicit_tag(self):
        syntactic = make_comment("a", owners=(SyntaxOwner(path="Declared"),))
        assert _resolve(syntactic, lends={0: "Lent"}).member_of == "Lent"
        explicit = make_comment("a", member_of="Tagged", owners=(SyntaxOwner(path="Declared"),))
        assert _resolve(explicit, lends={0: "Lent"}).member_of == "Tagged"

    def test_later_directive_replaces_earlier_in_block(self):
        comments = [
            make_comment(tags=(tag("lends", name="A"),), block="b"),
            make_comment("x", block="b"),
            make_comment(tags=(tag("lends", name="B"),), block="b"),
            make_comment("y", block="b"),
        ]
        assert collect_lends(comments) == {1: "A", 3: "B"}
