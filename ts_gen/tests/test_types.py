from unittest import TestCase

from ts_gen.errors import ShapeError
from ts_gen.types import (
    ARRAY_TUPLE_LIMIT,
    BOOLEAN,
    NUMBER,
    STRING,
    Array,
    Dependency,
    FixedArray,
    Lazy,
    Map,
    Option,
    Placeholder,
    Range,
    Result,
    Tuple,
    TypeParam,
    Wrapper,
)


class TestBuiltins(TestCase):
    def test_primitives(self):
        self.assertEqual(NUMBER.name(), "number")
        self.assertEqual(NUMBER.inline(), "number")
        self.assertIsNone(NUMBER.output_path())
        self.assertEqual(NUMBER.dependencies(), [])

    def test_option(self):
        self.assertEqual(Option(STRING).name(), "string | null")
        self.assertEqual(Option(STRING).generics(), [STRING])

    def test_array(self):
        ty = Array(Option(NUMBER))
        self.assertEqual(ty.name(), "Array<number | null>")
        self.assertEqual(ty.ident(), "Array")

    def test_fixed_array(self):
        self.assertEqual(FixedArray(NUMBER, 3).name(), "[number, number, number]")
        self.assertEqual(FixedArray(NUMBER, ARRAY_TUPLE_LIMIT + 1).name(), "Array<number>")

    def test_tuple(self):
        ty = Tuple(NUMBER, STRING, BOOLEAN)
        self.assertEqual(ty.name(), "[number, string, boolean]")
        self.assertEqual(ty.ident(), "[number, string, boolean]")

    def test_map(self):
        ty = Map(STRING, Array(NUMBER))
        self.assertEqual(ty.inline(), "{ [key: string]: Array<number> }")
        self.assertTrue(ty.is_object_like())

    def test_range(self):
        self.assertEqual(Range(NUMBER).inline(), "{ start: number, end: number }")

    def test_result(self):
        self.assertEqual(Result(NUMBER, STRING).inline(), "{ Ok: number } | { Err: string }")

    def test_wrapper_is_transparent(self):
        ty = Wrapper(Array(NUMBER), kind="Arc")
        self.assertEqual(ty.name(), "Array<number>")
        self.assertEqual(ty.inline(), "Array<number>")
        with self.assertRaises(ShapeError) as cm:
            ty.decl()
        self.assertEqual(str(cm.exception), "Arc<Array<number>> cannot be declared")

    def test_substitute(self):
        ty = Map(STRING, Tuple(TypeParam("T"), Option(TypeParam("U"))))
        bound = ty.substitute({"T": NUMBER, "U": STRING})
        self.assertEqual(bound.name(), "{ [key: string]: [number, string | null] }")
        self.assertEqual(TypeParam("V").substitute({"T": NUMBER}).name(), "V")

    def test_placeholder(self):
        self.assertEqual(Placeholder("T").name(), "T")
        self.assertIsNone(Placeholder("T").output_path())
        self.assertNotEqual(Placeholder("T"), TypeParam("T"))

    def test_identity(self):
        self.assertEqual(Array(NUMBER), Array(NUMBER))
        self.assertEqual(len({Array(NUMBER), Array(NUMBER), Array(STRING)}), 2)
        self.assertNotEqual(Array(NUMBER), FixedArray(NUMBER, 1))

    def test_unsupported_operations(self):
        for ty in (NUMBER, Array(NUMBER), Tuple(NUMBER), Option(NUMBER)):
            with self.assertRaises(ShapeError):
                ty.decl()
            with self.assertRaises(ShapeError):
                ty.decl_concrete()
            with self.assertRaises(ShapeError):
                ty.inline_flattened()

    def test_lazy(self):
        calls = []

        def resolve():
            calls.append(1)
            return Array(STRING)

        ty = Lazy(resolve)
        self.assertEqual(repr(ty), "Lazy(<unresolved>)")
        self.assertIsNone(ty.is_object_like())
        self.assertEqual(ty.name(), "Array<string>")
        self.assertEqual(ty.inline(), "Array<string>")
        self.assertEqual(ty, Array(STRING))
        self.assertEqual(len(calls), 1)

    def test_dependency_from_unexportable(self):
        self.assertIsNone(Dependency.from_type(Tuple(NUMBER)))
