import pytest

from termform.exceptions import FunctionKeyError
from termform.forms.function_keys import (
    FunctionKeyBinding,
    FunctionKeyCollection,
    clean_binding_name,
)
from termform.terminal.keys import Key


def noop(fields, active, run):
    return None


class TestFunctionKeyBinding:
    def test_legend(self):
        binding = FunctionKeyBinding("Save", Key.F5, noop)
        assert binding.number == 5
        assert binding.legend == "F5=Save"

    def test_name_is_cleaned(self):
        assert clean_binding_name("Save & exit!!") == "Save  exit"
        assert clean_binding_name("A very long binding name") == "A very long "
        assert FunctionKeyBinding("Print*", Key.F6, noop).name == "Print"

    def test_requires_function_key(self):
        with pytest.raises(FunctionKeyError):
            FunctionKeyBinding("Oops", Key.ENTER, noop)

    def test_invoke_passes_arguments(self):
        seen = []

        def operation(fields, active, run):
            seen.append((fields, active, run))
            return {"x": 1}

        binding = FunctionKeyBinding("Go", Key.F4, operation)
        assert binding.invoke("fields", None, "run") == {"x": 1}
        assert seen == [("fields", None, "run")]


class TestFunctionKeyCollection:
    def test_add_refuses_duplicates(self):
        keys = FunctionKeyCollection()
        assert keys.add(FunctionKeyBinding("One", Key.F4, noop))
        assert not keys.add(FunctionKeyBinding("Two", Key.F4, noop))
        assert keys[Key.F4].name == "One"

    def test_iterates_in_key_order(self):
        keys = FunctionKeyCollection()
        keys.bind(Key.F9, "Nine", noop)
        keys.bind(Key.F2, "Two", noop)
        keys.bind(Key.F12, "Twelve", noop)
        assert [b.number for b in keys] == [2, 9, 12]

    def test_next_available(self):
        keys = FunctionKeyCollection()
        for number in range(1, 6):
            keys.bind(Key.function(number), f"K{number}", noop)
        assert keys.next_available() is Key.F6
        assert keys.next_available(Key.F8) is Key.F8
        for number in range(6, 13):
            keys.bind(Key.function(number), f"K{number}", noop)
        assert keys.next_available() is None

    def test_enable_disable(self):
        keys = FunctionKeyCollection()
        keys.bind(Key.F1, "Accept", noop)
        assert keys.is_enabled(Key.F1)
        assert keys.set_enabled(Key.F1, False)
        assert not keys.set_enabled(Key.F1, False)
        assert not keys.is_enabled(Key.F1)
        assert Key.F1 not in keys.active_keys
        assert not keys.set_enabled(Key.F7, True)

    def test_remove(self):
        keys = FunctionKeyCollection([FunctionKeyBinding("X", Key.F4, noop)])
        assert keys.remove(Key.F4).name == "X"
        assert keys.remove(Key.F4) is None
        assert Key.F4 not in keys
        assert keys.get(Key.F4) is None
