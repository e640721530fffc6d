from unittest import TestCase

import pytest

from ts_gen.attr import Diagnostic, EnumAttr, FieldAttr, OptionalPolicy, StructAttr, TagKind, VariantAttr
from ts_gen.attr.parser import Group, Ident, parse_args
from ts_gen.errors import AttrError
from ts_gen.inflection import Inflection
from ts_gen.registry import TypeRegistry
from ts_gen.schema import EnumDef, Field, StructDef, Variant, serde, ts
from ts_gen.types import NUMBER, STRING, Array, Option


class TestParseArgs(TestCase):
    def test_string_form(self):
        entries = parse_args('rename_all = "camelCase", skip, optional = nullable')
        self.assertEqual(
            entries,
            [("rename_all", "camelCase"), ("skip", True), ("optional", Ident("nullable"))],
        )

    def test_escaped_string(self):
        self.assertEqual(parse_args(r'rename = "a\"b"'), [("rename", 'a"b')])

    def test_group(self):
        self.assertEqual(parse_args('rename(serialize = "a"), skip'), [("rename", Group('serialize = "a"')), ("skip", True)])

    def test_mapping_form(self):
        entries = parse_args({"as_": "Option<_>", "skip": False, "inline": True, "rename": None})
        self.assertEqual(entries, [("as", "Option<_>"), ("inline", True)])

    def test_missing_value(self):
        with self.assertRaises(AttrError):
            parse_args("rename = ")

    def test_missing_comma(self):
        with self.assertRaises(AttrError):
            parse_args('rename = "a" skip')

    def test_unexpected_character(self):
        with self.assertRaises(AttrError):
            parse_args("skip; inline")


class TestNativeAttributes(TestCase):
    def test_unknown_key(self):
        with self.assertRaises(AttrError) as cm:
            FieldAttr.from_attrs([ts("unknown")])
        self.assertEqual(
            str(cm.exception),
            'Unknown attribute "unknown". Allowed attributes are: type, as, rename, inline, skip, optional, flatten',
        )

    def test_flag_with_value(self):
        with self.assertRaises(AttrError):
            FieldAttr.from_attrs([ts('skip = "yes"')])

    def test_right_biased_merge(self):
        attr = StructAttr.from_attrs([ts(rename="A", export=True), ts(rename="B")])
        self.assertEqual(attr.rename, "B")
        self.assertTrue(attr.export)

    def test_bound_concatenates(self):
        attr = StructAttr.from_attrs([ts(bound="T: Clone"), ts('bound = "U: Default, V: Into<String>"')])
        self.assertEqual(attr.bound, ["T: Clone", "U: Default", "V: Into<String>"])

    def test_invalid_bound(self):
        with self.assertRaises(AttrError):
            StructAttr.from_attrs([ts(bound="not a predicate")])

    def test_inflection_value(self):
        attr = StructAttr.from_attrs([ts('rename_all = "kebab-case"')])
        self.assertIs(attr.rename_all, Inflection.KEBAB)

    def test_invalid_inflection(self):
        with self.assertRaises(AttrError):
            StructAttr.from_attrs([ts(rename_all="Title Case")])

    def test_optional_policies(self):
        self.assertIs(FieldAttr.from_attrs([]).optional, OptionalPolicy.NONE)
        self.assertIs(FieldAttr.from_attrs([ts("optional")]).optional, OptionalPolicy.BARE)
        self.assertIs(FieldAttr.from_attrs([ts("optional = nullable")]).optional, OptionalPolicy.NULLABLE)
        self.assertIs(FieldAttr.from_attrs([ts(optional="nullable")]).optional, OptionalPolicy.NULLABLE)

    def test_invalid_optional(self):
        with self.assertRaises(AttrError):
            FieldAttr.from_attrs([ts("optional = always")])

    def test_as_type_path(self):
        registry = TypeRegistry()
        attr = FieldAttr.from_attrs([ts(as_="Vec<Option<string>>")], registry=registry)
        self.assertEqual(attr.as_type, Array(Option(STRING)))

    def test_as_unknown_type(self):
        with self.assertRaises(AttrError):
            FieldAttr.from_attrs([ts(as_="Missing")], registry=TypeRegistry())

    def test_resolve_type_infer(self):
        attr = FieldAttr.from_attrs([ts(as_="Option<_>")], registry=TypeRegistry())
        self.assertEqual(attr.resolve_type(NUMBER), Option(NUMBER))


class TestSerdeAttributes(TestCase):
    def test_native_wins(self):
        attr = StructAttr.from_attrs([serde(rename="FromSerde"), ts(rename="Native")])
        self.assertEqual(attr.rename, "Native")

    def test_fills_unset(self):
        attr = StructAttr.from_attrs([serde('rename = "FromSerde", tag = "kind"'), ts(export=True)])
        self.assertEqual(attr.rename, "FromSerde")
        self.assertEqual(attr.tag, "kind")
        self.assertTrue(attr.export)

    def test_disabled(self):
        attr = StructAttr.from_attrs([serde(rename="FromSerde")], serde_compat=False)
        self.assertIsNone(attr.rename)

    def test_default_is_ignored(self):
        diagnostics = []
        attr = FieldAttr.from_attrs([serde("default, skip")], diagnostics=diagnostics)
        self.assertTrue(attr.skip)
        self.assertEqual(diagnostics, [])

    def test_unknown_key_drops_occurrence(self):
        diagnostics = []
        attr = FieldAttr.from_attrs(
            [serde('rename = "x", with = "module"'), serde('skip')],
            diagnostics=diagnostics,
        )
        self.assertIsNone(attr.rename)
        self.assertTrue(attr.skip)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].title, "failed to parse serde attribute")
        self.assertEqual(diagnostics[0].content, '#[serde(rename = "x", with = "module")]')
        self.assertIn('Unknown attribute "with"', diagnostics[0].note)

    def test_warnings_suppressed(self):
        attr = FieldAttr.from_attrs([serde('with = "module"')], diagnostics=None)
        self.assertIsNone(attr.rename)

    def test_native_only_key_rejected(self):
        diagnostics = []
        FieldAttr.from_attrs([serde("inline")], diagnostics=diagnostics)
        self.assertEqual(len(diagnostics), 1)

    def test_diagnostic_str(self):
        diagnostic = Diagnostic("title", "content", "note")
        self.assertEqual(str(diagnostic), "warning: title\n  |\n  | content\n  |\n  = note: note")


class TestFieldValidity:
    @pytest.mark.parametrize(
        "args, message",
        [
            ('type = "string", as = "number"', "`type` is not compatible with `as`"),
            ('type = "string", inline', "`type` is not compatible with `inline`"),
            ('type = "string", flatten', "`type` is not compatible with `flatten`"),
            ('flatten, as = "number"', "`as` is not compatible with `flatten`"),
            ('flatten, rename = "b"', "`rename` is not compatible with `flatten`"),
            ("flatten, inline", "`inline` is not compatible with `flatten`"),
        ],
    )
    def test_conflicts(self, args, message):
        field = Field("a", NUMBER)
        attr = FieldAttr.from_attrs([ts(args)], registry=TypeRegistry())
        with pytest.raises(AttrError, match=message):
            attr.assert_validity(field)

    def test_flatten_optional(self):
        field = Field("a", Option(NUMBER))
        attr = FieldAttr.from_attrs([ts("flatten, optional")])
        with pytest.raises(AttrError, match="`optional` is not compatible with `flatten`"):
            attr.assert_validity(field)

    @pytest.mark.parametrize("args", ["flatten", 'rename = "b"', "optional"])
    def test_positional_field(self, args):
        field = Field(None, Option(NUMBER))
        attr = FieldAttr.from_attrs([ts(args)])
        with pytest.raises(AttrError, match="tuple struct fields"):
            attr.assert_validity(field)

    def test_optional_requires_option(self):
        attr = FieldAttr.from_attrs([ts("optional")])
        with pytest.raises(AttrError, match="optional type"):
            attr.assert_validity(Field("a", NUMBER))

    def test_optional_through_as(self):
        attr = FieldAttr.from_attrs([ts('optional, as = "Option<_>"')], registry=TypeRegistry())
        attr.assert_validity(Field("a", NUMBER))

    def test_flatten_and_skip(self):
        attr = FieldAttr.from_attrs([ts("flatten, skip")])
        attr.assert_validity(Field("a", NUMBER))


class TestContainerValidity:
    def test_struct_type_and_as(self):
        attr = StructAttr.from_attrs([ts('type = "string", as = "number"')], registry=TypeRegistry())
        with pytest.raises(AttrError, match="S: `type` is not compatible with `as`"):
            attr.assert_validity(StructDef("S", [Field("a", NUMBER)]))

    def test_struct_as_and_tag(self):
        attr = StructAttr.from_attrs([ts('as = "number", tag = "kind"')], registry=TypeRegistry())
        with pytest.raises(AttrError, match="`as` is not compatible with `tag`"):
            attr.assert_validity(StructDef("S", [Field("a", NUMBER)]))

    def test_tuple_struct_rename_all(self):
        attr = StructAttr.from_attrs([ts(rename_all="camelCase")])
        with pytest.raises(AttrError, match="`rename_all` cannot be used with unit or tuple structs"):
            attr.assert_validity(StructDef("S", [Field(None, NUMBER)]))

    def test_unit_struct_tag(self):
        attr = StructAttr.from_attrs([ts(tag="kind")])
        with pytest.raises(AttrError, match="`tag` cannot be used with unit or tuple structs"):
            attr.assert_validity(StructDef("S"))

    @pytest.mark.parametrize(
        "args, kind",
        [
            ("", TagKind.EXTERNALLY),
            ('tag = "type"', TagKind.INTERNALLY),
            ('tag = "t", content = "c"', TagKind.ADJACENTLY),
            ("untagged", TagKind.UNTAGGED),
        ],
    )
    def test_enum_tagging(self, args, kind):
        attr = EnumAttr.from_attrs([ts(args)])
        assert attr.tagged().kind is kind

    @pytest.mark.parametrize(
        "args, message",
        [
            ('untagged, tag = "t"', "`untagged` cannot be used with `tag`"),
            ('untagged, tag = "t", content = "c"', "`untagged` cannot be used with `content`"),
            ('content = "c"', "`content` cannot be used without `tag`"),
            ('type = "string", tag = "t"', "`type` is not compatible with `tag`"),
            ('type = "string", untagged', "`type` is not compatible with `untagged`"),
        ],
    )
    def test_enum_invalid(self, args, message):
        attr = EnumAttr.from_attrs([ts(args)])
        with pytest.raises(AttrError, match=message):
            attr.assert_validity(EnumDef("E", [Variant("A")]))

    def test_variant_rename_all_requires_named_fields(self):
        attr = VariantAttr.from_attrs([ts(rename_all="camelCase")])
        with pytest.raises(AttrError, match="unit or tuple variants"):
            attr.assert_validity(Variant("A"))
