from __future__ import annotations

import pytest

from wrapper_gen import (
    CONSTRUCTOR,
    ConversionContext,
    EnumDescriptor,
    MethodGroup,
    MethodTranslator,
    SymbolNode,
    SymbolTree,
    TypeConverter,
    TypeHandler,
    resolve_class,
    select_methods,
)
from wrapper_gen.types import ENUM, STRING, UNSUPPORTED, VOID


@pytest.fixture
def translator(tree: SymbolTree) -> MethodTranslator:
    led = resolve_class(tree, "Led")
    return MethodTranslator(led, "Led", TypeConverter(tree))


@pytest.fixture
def methods(tree: SymbolTree) -> list[SymbolNode]:
    return select_methods(resolve_class(tree, "Led"))


def _method(methods: list[SymbolNode], name: str, index: int = 0) -> SymbolNode:
    return [m for m in methods if m.name == name][index]


class FixedPointHandler(TypeHandler):
    def js_check(self, ctx: ConversionContext) -> str:
        return f"!jerry_value_is_number(args_p[{ctx.idx}])"

    def js_to_native(self, ctx: ConversionContext) -> str:
        return f"float {ctx.var} = to_fixed(args_p[{ctx.idx}]);"

    def native_to_js(self, ctx: ConversionContext) -> str:
        return f"from_fixed({ctx.var})"


def test_instance_method_unwraps_this(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    desc = translator.translate(_method(methods, "off"), methods)
    assert desc is not None
    assert desc.name == "off"
    assert desc.args_count == 0
    assert "jerry_get_object_native_pointer(this_val, &native_ptr, &Led_native_info)" in desc.body
    assert "Led* native_obj = static_cast<Led*>(native_ptr);" in desc.body
    assert "native_obj->off();" in desc.body
    assert desc.body.endswith("return jerry_create_undefined();")
    assert "// " not in desc.body


def test_overloads_are_labelled_with_their_signature(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    no_args = translator.translate(_method(methods, "on", 0), methods)
    one_arg = translator.translate(_method(methods, "on", 1), methods)
    assert no_args.args_count == 0
    assert no_args.body.startswith("// on()")
    assert one_arg.args_count == 1
    assert one_arg.body.startswith("// on(int)")
    assert "if (!jerry_value_is_number(args_p[0])) {" in one_arg.body
    assert "int arg0 = (int)jerry_get_number_value(args_p[0]);" in one_arg.body
    assert "native_obj->on(arg0);" in one_arg.body


def test_constructor_allocates_and_wraps(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    desc = translator.translate(_method(methods, "Led"), methods)
    assert desc.name == CONSTRUCTOR
    assert desc.args_count == 1
    assert "Led* native_obj = new Led(arg0);" in desc.body
    assert desc.body.endswith("return Led_wrap_native(native_obj);")
    assert "this_val" not in desc.body


def test_static_method_is_called_on_the_class(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    desc = translator.translate(_method(methods, "count"), methods)
    assert "int result = Led::count();" in desc.body
    assert "return jerry_create_number((double)result);" in desc.body
    assert "native_ptr" not in desc.body


@pytest.mark.parametrize("name", ["~Led", "operator=", "log"])
def test_unsupported_methods_yield_nothing(
    translator: MethodTranslator, methods: list[SymbolNode], name: str
) -> None:
    assert translator.translate(_method(methods, name), methods) is None


def test_enum_parameters_are_reported(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    expected = EnumDescriptor(name="Mode", values=(("SOLID", 0), ("BLINK", 1)))

    set_mode = translator.translate(_method(methods, "setMode"), methods)
    assert set_mode.enums == (expected,)
    assert "Led::Mode arg0 = (Led::Mode)(int)jerry_get_number_value(args_p[0]);" in set_mode.body

    get_mode = translator.translate(_method(methods, "getMode"), methods)
    assert get_mode.enums == (expected,)
    assert "Led::Mode result = native_obj->getMode();" in get_mode.body


def test_string_arguments_are_copied_and_released(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    desc = translator.translate(_method(methods, "setName"), methods)
    body = desc.body
    assert "if (!jerry_value_is_string(args_p[0])) {" in body
    assert "char* arg0 = new char[arg0_size + 1];" in body
    assert body.index("native_obj->setName(arg0);") < body.index("delete[] arg0;")
    assert body.index("delete[] arg0;") < body.index("return jerry_create_undefined();")
    assert desc.signature == "setName(const char*)"


def test_return_values_are_converted(
    translator: MethodTranslator, methods: list[SymbolNode]
) -> None:
    name = translator.translate(_method(methods, "name"), methods)
    assert "const char* result = native_obj->name();" in name.body
    assert "jerry_create_string((const jerry_char_t*)result)" in name.body

    is_on = translator.translate(_method(methods, "isOn"), methods)
    assert "bool result = native_obj->isOn();" in is_on.body
    assert "return jerry_create_boolean(result);" in is_on.body

    brightness = translator.translate(_method(methods, "setBrightness"), methods)
    assert "float arg0 = (float)jerry_get_number_value(args_p[0]);" in brightness.body


def test_custom_type_handler_takes_precedence(
    tree: SymbolTree, methods: list[SymbolNode]
) -> None:
    conv = TypeConverter(tree)
    conv.register("float", FixedPointHandler())
    translator = MethodTranslator(resolve_class(tree, "Led"), "Led", conv)

    desc = translator.translate(_method(methods, "setBrightness"), methods)
    assert conv.has_handler("float")
    assert "float arg0 = to_fixed(args_p[0]);" in desc.body


def test_destructor_fragment(translator: MethodTranslator) -> None:
    text = translator.create_destructor()
    assert "void Destruct_Led(void* native_p) {" in text
    assert "    delete static_cast<Led*>(native_p);" in text
    assert "static const jerry_object_native_info_t Led_native_info = { Destruct_Led };" in text


def test_native_wrapper_attaches_every_dispatcher(translator: MethodTranslator) -> None:
    groups = [
        MethodGroup(name="on", function_name="Led_on"),
        MethodGroup(name="off", function_name="Led_off"),
    ]
    text = translator.create_native_wrapper(groups)
    assert "jerry_value_t Led_wrap_native(Led* native_obj) {" in text
    assert "jerry_set_object_native_pointer(js_obj, native_obj, &Led_native_info);" in text
    assert "jerry_create_external_function(Led_on)" in text
    assert "jerry_create_external_function(Led_off)" in text
    assert '"off"' in text


def test_type_converter_categories(tree: SymbolTree) -> None:
    conv = TypeConverter(tree)
    assert conv.describe(None).category == VOID
    assert conv.describe(0x41).category == STRING
    assert conv.describe(0x41).spelling == "const char*"
    assert conv.describe(0x1A6).category == UNSUPPORTED
    assert conv.describe(0x1A0).category == UNSUPPORTED
    assert conv.describe(0xDEAD).category == UNSUPPORTED


def test_typedef_names_anonymous_enum() -> None:
    tree = SymbolTree.parse(
        " <1><10>: Abbrev Number: 2 (DW_TAG_enumeration_type)\n"
        "    <11>   DW_AT_byte_size   : 1\n"
        " <2><12>: Abbrev Number: 3 (DW_TAG_enumerator)\n"
        "    <13>   DW_AT_name        : PIN_INPUT\n"
        "    <14>   DW_AT_const_value : 0\n"
        " <2><15>: Abbrev Number: 3 (DW_TAG_enumerator)\n"
        "    <16>   DW_AT_name        : PIN_OUTPUT\n"
        "    <17>   DW_AT_const_value : 1\n"
        " <2><18>: Abbrev Number: 0\n"
        " <1><19>: Abbrev Number: 4 (DW_TAG_typedef)\n"
        "    <1a>   DW_AT_name        : PinDirection\n"
        "    <1b>   DW_AT_type        : <0x10>\n"
    )
    info = TypeConverter(tree).describe(0x19)
    assert info.category == ENUM
    assert info.spelling == "PinDirection"
    assert info.enum == EnumDescriptor(
        name="PinDirection", values=(("PIN_INPUT", 0), ("PIN_OUTPUT", 1))
    )


def test_helper_names_match_generated_symbols(translator: MethodTranslator) -> None:
    names = translator.helper_names()
    assert names == ["Destruct_Led", "Led_native_info", "Led_wrap_native"]
    assert f"void {names[0]}(void* native_p)" in translator.create_destructor()
    assert f"jerry_value_t {names[2]}(Led* native_obj)" in translator.create_native_wrapper([])
