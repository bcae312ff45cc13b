"""Unit tests for the base error type."""

import pytest

from composerr import ComposableError, ComposerrConfig, ErrorArguments, configure, loggable


class UserNotFound(ComposableError):
    pass


class AdminNotFound(UserNotFound):
    pass


class TestConstruction:
    """Test construction from the supported call shapes."""

    def test_empty(self):
        """Test an empty call uses the default message and fallback name."""
        err = ComposableError()
        assert err.message == "Unknown error"
        assert err.name == "Error"
        assert err.cause() is None
        assert err.properties == {}

    def test_message_and_properties(self):
        """Test a template is rendered against properties."""
        err = ComposableError("Hi ${name}", {"name": "Ana"})
        assert err.message == "Hi Ana"
        assert err.template == "Hi ${name}"

    def test_cause_message_properties(self):
        """Test the full cause, message, properties shape."""
        cause = ValueError("bad value")
        err = UserNotFound(cause, "User ${user} not found", {"user": "ana"})
        assert err.cause() is cause
        assert err.__cause__ is cause
        assert err.message == "User ana not found"
        assert err.user == "ana"

    def test_keyword_properties(self):
        """Test keyword arguments become properties."""
        err = ComposableError("Order ${order_id} failed", order_id=12)
        assert err.message == "Order 12 failed"
        assert err.order_id == 12

    def test_message_keyword(self):
        """Test a message keyword is rendered as the message."""
        err = ComposableError(message="boom ${x}", x=1)
        assert err.message == "boom 1"
        assert err.properties == {"x": 1}

    def test_properties_with_message_key(self):
        """Test a leading mapping with a message key."""
        err = ComposableError({"message": "User ${user}", "user": "ana"})
        assert err.message == "User ana"
        assert "message" not in err.properties

    def test_non_exception_cause_not_linked(self):
        """Test a primitive cause is kept but not set as __cause__."""
        err = ComposableError(404, "Wrapped")
        assert err.cause() == 404
        assert err.__cause__ is None

    def test_unsupported_argument(self):
        """Test unknown argument types never raise."""
        err = ComposableError(object())
        assert err.message == "Unknown error"
        assert err.properties == {}

    def test_is_exception(self):
        """Test errors can be raised and caught like any exception."""
        with pytest.raises(UserNotFound) as info:
            raise UserNotFound("User ${user} not found", {"user": "ana"})
        assert str(info.value) == "User ana not found"

    def test_family_flag(self):
        """Test the family marker is set on every instance."""
        assert ComposableError().is_composerr is True
        assert UserNotFound().is_composerr is True


class TestMessageFallback:
    """Test where the message comes from when none is given."""

    def test_cause_message(self):
        """Test the cause message is used when no message is given."""
        err = ComposableError(OSError("ENOENT"))
        assert err.message == "ENOENT"

    def test_composerr_cause_message(self):
        """Test a composerr cause gives its rendered message."""
        cause = ComposableError("Inner ${x}", {"x": 1})
        assert ComposableError(cause).message == "Inner 1"

    def test_cause_message_not_rendered_again(self):
        """Test placeholders in a cause message stay literal."""
        err = ComposableError(ValueError("literal ${x} and $y"), {"x": "no"})
        assert err.message == "literal ${x} and $y"

    def test_cause_without_message(self):
        """Test an empty cause message falls back to the default."""
        assert ComposableError(ValueError()).message == "Unknown error"

    def test_explicit_message_wins_over_cause(self):
        """Test an explicit message beats the cause message."""
        assert ComposableError(ValueError("low"), "high").message == "high"

    def test_configured_default(self):
        """Test the default message comes from configuration."""
        configure(config=ComposerrConfig(default_message="Oops"))
        assert ComposableError().message == "Oops"

    def test_number_message(self):
        """Test a number is used as message."""
        assert ComposableError(42).message == "42"


class TestIdentity:
    """Test identity naming."""

    def test_most_derived_name(self):
        """Test the most derived class names the error."""
        assert UserNotFound().name == "UserNotFound"
        assert AdminNotFound().name == "AdminNotFound"

    def test_fixed_name_wins(self):
        """Test a fixed name is kept by subclasses."""
        class Fixed(ComposableError):
            fixed_name = "Stable"

        class Derived(Fixed):
            pass

        assert Derived().name == "Stable"

    def test_configured_fallback_name(self):
        """Test the fallback name comes from configuration."""
        configure(config=ComposerrConfig(fallback_name="AppError"))
        assert ComposableError().name == "AppError"

    def test_name_property_does_not_change_identity(self):
        """Test a property called name renders but leaves identity alone."""
        err = UserNotFound("Hi ${name}", {"name": "Ana"})
        assert err.message == "Hi Ana"
        assert err.name == "UserNotFound"


class TestMessageTemplates:
    """Test lazy rendering and re-templating."""

    def test_render_idempotent(self):
        """Test reading the message twice gives the same text."""
        err = ComposableError("Hi ${name}", {"name": "Ana"})
        assert err.message == err.message == err.render()

    def test_message_follows_property_changes(self):
        """Test the message is rendered at read time."""
        err = ComposableError("Count: ${count}", {"count": 1})
        err.count = 2
        assert err.message == "Count: 2"

    def test_assign_message_replaces_template(self):
        """Test assigning message stores a template and keeps properties."""
        err = ComposableError("Hi ${name}", {"name": "Ana"})
        err.message = "Bye ${name}"
        assert err.message == "Bye Ana"
        assert err.template == "Bye ${name}"
        assert err.properties == {"name": "Ana"}

    def test_parse_does_not_store(self):
        """Test parse renders another template without replacing the stored one."""
        err = ComposableError("Hi ${name}", {"name": "Ana"})
        assert err.parse("Hola ${name}") == "Hola Ana"
        assert err.template == "Hi ${name}"
        assert err.message == "Hi Ana"

    def test_self_reference(self):
        """Test templates can reference attributes of the error."""
        err = UserNotFound("${name} raised")
        assert err.message == "UserNotFound raised"

    def test_message_self_reference_renders_empty(self):
        """Test message and stack never resolve from the instance."""
        err = ComposableError("[${message}${stack}]")
        assert err.message == "[]"

    def test_whitespace_stripped(self):
        """Test surrounding whitespace is stripped."""
        err = ComposableError("  ${a}  ", {"a": ""})
        assert err.message == ""

    def test_missing_placeholder(self):
        """Test unresolved placeholders render empty."""
        assert ComposableError("Hi ${nobody}!").message == "Hi !"

    def test_failing_engine_returns_raw_template(self):
        """Test a broken engine degrades to the raw template."""
        class BrokenEngine:
            def render(self, template, context):
                raise RuntimeError("engine down")

        configure(engine=BrokenEngine())
        assert ComposableError(" Hi ${name} ").message == "Hi ${name}"

    def test_method_placeholders_render_empty(self):
        """Test placeholders naming methods render empty instead of recursing."""
        err = ComposableError(ValueError("root"), "failed: ${cause}")
        assert err.message == "failed:"
        assert loggable("info")("level is ${level}").message == "level is"

    def test_cause_value_through_property(self):
        """Test the cause can still be shown by passing it as a property."""
        cause = ValueError("root")
        err = ComposableError(cause, "failed: ${reason}", {"reason": cause})
        assert err.message == "failed: root"


class TestCauseMessageLiteral:
    """Test the cause message is shown without rendering."""

    class UpperEngine:
        def __init__(self):
            self.calls = []

        def render(self, template, context):
            self.calls.append(template)
            return template.upper()

    def test_custom_engine_not_applied_to_cause_message(self):
        """Test any engine leaves a cause message untouched."""
        engine = self.UpperEngine()
        configure(engine=engine)
        err = ComposableError(ValueError("costs $5"))
        assert err.message == "costs $5"
        assert engine.calls == []

    def test_default_engine_keeps_dollars(self):
        """Test dollar signs in a cause message are not doubled."""
        assert ComposableError(ValueError("costs $5 or $$6")).message == "costs $5 or $$6"

    def test_assigned_message_is_rendered(self):
        """Test assigning a message switches back to rendering."""
        engine = self.UpperEngine()
        configure(engine=engine)
        err = ComposableError(ValueError("low"))
        err.message = "high"
        assert err.message == "HIGH"

    def test_parse_still_renders(self):
        """Test parse uses the engine even when the message is literal."""
        err = ComposableError(ValueError("low"), {"x": 1})
        assert err.parse("x=${x}") == "x=1"
        assert err.message == "low"


class TestAccessors:
    """Test the remaining accessors."""

    def test_properties_include_public_attributes(self):
        """Test attributes set after construction show up in properties."""
        err = ComposableError("msg", {"a": 1})
        err.b = 2
        assert err.properties == {"a": 1, "b": 2}

    def test_missing_attribute(self):
        """Test unknown attributes still raise AttributeError."""
        with pytest.raises(AttributeError):
            ComposableError().nothing_here

    def test_stack_before_raise(self):
        """Test the stack starts with identity and message and shows the creation site."""
        err = UserNotFound("gone")
        assert err.stack.startswith("UserNotFound: gone\n")
        assert "test_stack_before_raise" in err.stack

    def test_stack_after_raise(self):
        """Test the stack uses the traceback once raised."""
        try:
            raise UserNotFound("gone")
        except UserNotFound as err:
            caught = err
        assert caught.stack.startswith("UserNotFound: gone\n")
        assert "test_stack_after_raise" in caught.stack

    def test_stack_excludes_package_frames(self):
        """Test construction frames of the package are not part of the stack."""
        err = UserNotFound("gone")
        assert "composerr/base.py" not in err.stack

    def test_repr(self):
        """Test repr shows identity and stored template."""
        assert repr(UserNotFound("gone")) == "UserNotFound('gone')"
        assert repr(UserNotFound("Hi ${x}", {"x": 1})) == "UserNotFound('Hi ${x}')"


class TestNamedConstructors:
    """Test the classmethod constructors."""

    def test_from_message(self):
        """Test from_message."""
        err = UserNotFound.from_message("User ${user}", user="ana")
        assert isinstance(err, UserNotFound)
        assert err.message == "User ana"

    def test_from_cause(self):
        """Test from_cause takes the cause message."""
        cause = KeyError("user")
        err = UserNotFound.from_cause(cause)
        assert err.cause() is cause
        assert err.message == "'user'"

    def test_from_cause_and_message(self):
        """Test from_cause_and_message with a non-exception cause."""
        err = UserNotFound.from_cause_and_message({"code": 1}, "Wrapped")
        assert err.cause() == {"code": 1}
        assert err.message == "Wrapped"

    def test_from_properties(self):
        """Test from_properties."""
        err = UserNotFound.from_properties({"message": "User ${user}", "user": "ana"})
        assert err.message == "User ana"

    def test_error_arguments_instance(self):
        """Test passing an ErrorArguments directly."""
        err = UserNotFound(ErrorArguments.from_message("Hi ${x}", {"x": 1}))
        assert err.message == "Hi 1"
