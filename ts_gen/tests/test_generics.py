import pytest

from ts_gen import derive
from ts_gen.config import ExportConfig
from ts_gen.registry import TypeRegistry
from ts_gen.schema import EnumDef, Field, GenericParam, StructDef, Variant, ts
from ts_gen.types import NUMBER, STRING, Array, Option, TypeParam, lazy, ref


@pytest.fixture
def registry():
    return TypeRegistry()


@pytest.fixture
def page(registry):
    return derive(
        StructDef(
            "Page",
            [Field("items", Array(TypeParam("T"))), Field("total", NUMBER)],
            generics=[GenericParam("T")],
        ),
        config=ExportConfig(),
        registry=registry,
    )


@pytest.fixture
def user(registry):
    return derive(StructDef("User", [Field("id", NUMBER)]), config=ExportConfig(), registry=registry)


class TestGenerics:
    def test_placeholders(self, page):
        assert page.name() == "Page<T>"
        assert page.ident() == "Page"
        assert page.inline() == "{ items: Array<T>, total: number }"
        assert page.decl() == "type Page<T> = { items: Array<T>, total: number };"

    def test_bound(self, page, user):
        bound = page.of(user)
        assert bound.name() == "Page<User>"
        assert bound.inline() == "{ items: Array<User>, total: number }"
        assert bound.decl() == "type Page<T> = { items: Array<T>, total: number };"
        assert bound.decl_concrete() == "type Page = { items: Array<User>, total: number };"

    def test_bound_dependencies(self, page, user):
        bound = page.of(user)
        assert [d.ts_name for d in bound.dependencies()] == ["User"]
        assert bound.generics() == [user]

    def test_identity(self, page):
        assert page.of(STRING) == page.of(STRING)
        assert hash(page.of(STRING)) == hash(page.of(STRING))
        assert page.of(STRING) != page.of(NUMBER)
        assert page.of(STRING).output_path() == page.of(NUMBER).output_path()

    def test_bound_attribute(self, registry):
        ty = derive(
            StructDef("Boxed", [Field("value", TypeParam("T"))], generics=[GenericParam("T")], attrs=[ts(bound="T: Clone")]),
            config=ExportConfig(),
            registry=registry,
        )
        assert ty.bound == ["T: Clone"]

    def test_arity(self, page):
        with pytest.raises(TypeError):
            page.of(STRING, NUMBER)

    def test_default(self, registry, user):
        ty = derive(
            StructDef(
                "Paged",
                [Field("value", TypeParam("T"))],
                generics=[GenericParam("T", default=user)],
            ),
            config=ExportConfig(),
            registry=registry,
        )
        assert ty.decl() == "type Paged<T = User> = { value: T };"
        assert [d.ts_name for d in ty.dependencies()] == ["User"]

    def test_nested(self, registry, page):
        outer = derive(
            StructDef(
                "Outer",
                [Field("page", page.of(TypeParam("U"))), Field("maybe", Option(TypeParam("U")))],
                generics=[GenericParam("U")],
            ),
            config=ExportConfig(),
            registry=registry,
        )
        assert outer.decl() == "type Outer<U> = { page: Page<U>, maybe: U | null };"
        assert outer.of(STRING).inline() == "{ page: Page<string>, maybe: string | null }"
        assert [d.ts_name for d in outer.of(STRING).dependencies()] == ["Page"]

    def test_inline_generic_field(self, registry, page, user):
        ty = derive(
            StructDef("Users", [Field("page", page.of(user), attrs=[ts("inline")])]),
            config=ExportConfig(),
            registry=registry,
        )
        assert ty.inline() == "{ page: { items: Array<User>, total: number } }"
        assert [d.ts_name for d in ty.dependencies()] == ["User"]

    def test_generic_enum(self, registry):
        ty = derive(
            EnumDef(
                "Either",
                [Variant("Left", [Field(None, TypeParam("L"))]), Variant("Right", [Field(None, TypeParam("R"))])],
                generics=[GenericParam("L"), GenericParam("R")],
            ),
            config=ExportConfig(),
            registry=registry,
        )
        assert ty.decl() == 'type Either<L, R> = { "Left": L } | { "Right": R };'
        assert ty.of(NUMBER, STRING).inline() == '{ "Left": number } | { "Right": string }'

    def test_as_with_type_path(self, registry, page, user):
        ty = derive(
            StructDef("S", [Field("users", NUMBER, attrs=[ts(as_="Page<User>")])]),
            config=ExportConfig(),
            registry=registry,
        )
        assert ty.inline() == "{ users: Page<User> }"


class TestRecursion:
    def test_self_reference(self, registry):
        node = derive(
            StructDef("Node", [Field("value", NUMBER), Field("children", Array(ref("Node", registry)))]),
            config=ExportConfig(),
            registry=registry,
        )
        assert node.inline() == "{ value: number, children: Array<Node> }"
        assert [d.ts_name for d in node.dependencies()] == ["Node"]

    def test_mutual_reference(self, registry):
        types = {}
        a = derive(
            StructDef("A", [Field("b", Option(lazy(lambda: types["B"])))]),
            config=ExportConfig(),
            registry=registry,
        )
        types["B"] = derive(StructDef("B", [Field("a", a)]), config=ExportConfig(), registry=registry)
        assert a.inline() == "{ b: B | null }"
        assert types["B"].inline() == "{ a: A }"
        assert [d.ts_name for d in a.dependencies()] == ["B"]
