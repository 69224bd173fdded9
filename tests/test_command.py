"""Tests for the Command definition."""

from botwire.commands import Command, normalize_driver
from botwire.drivers import NullDriver
from botwire.interfaces import Driver, Middleware


class TelegramDriver(Driver):
    def is_configured(self) -> bool:
        return True

    async def send_message(self, recipient: str, text: str) -> None:
        pass


class WebDriver(TelegramDriver):
    pass


class RiverDriver(TelegramDriver):
    """Name ends in letters that a character trim would eat."""


class Auth(Middleware):
    pass


class Throttle(Middleware):
    pass


def greet():
    return "hi"


# -------------------------------------------------------------------
# Construction and serialization
# -------------------------------------------------------------------

def test_to_dict_defaults():
    """A bare command serializes with empty optional fields."""
    cmd = Command("hello", greet)
    assert cmd.to_dict() == {
        "pattern": "hello",
        "callback": greet,
        "driver": None,
        "middleware": [],
        "recipient": None,
    }


def test_to_dict_always_has_five_keys():
    cmd = (
        Command("hello", "handlers.greet", "alice", "Slack")
        .set_driver([TelegramDriver, "Slack"])
        .set_recipient("bob")
        .set_middleware([Auth()])
        .stops_conversation()
        .skips_conversation()
    )
    assert set(cmd.to_dict()) == {"pattern", "callback", "driver", "middleware", "recipient"}


def test_to_dict_returns_snapshot():
    """Mutating the returned lists must not touch the command."""
    cmd = Command("hello", greet).set_middleware(Auth()).set_driver("Web")
    snapshot = cmd.to_dict()
    snapshot["middleware"].clear()
    snapshot["driver"].append("Slack")
    assert len(cmd.middleware) == 1
    assert cmd.driver == ["Web"]


def test_constructor_keeps_recipient_and_driver_as_given():
    cmd = Command("hello", "handlers.greet", "alice", "Telegram")
    assert cmd.recipient == "alice"
    assert cmd.driver == "Telegram"
    assert cmd.get_pattern() == "hello"
    assert cmd.get_callback() == "handlers.greet"
    assert cmd.get_middleware() == []


# -------------------------------------------------------------------
# Conversation flags
# -------------------------------------------------------------------

def test_flags_default_false():
    cmd = Command("hello", greet)
    assert cmd.should_stop_conversation() is False
    assert cmd.should_skip_conversation() is False


def test_stops_conversation_is_independent_of_skip():
    cmd = Command("stop", greet)
    cmd.stops_conversation()
    assert cmd.should_stop_conversation() is True
    assert cmd.should_skip_conversation() is False


def test_skips_conversation_is_independent_of_stop():
    cmd = Command("weather", greet).skips_conversation()
    assert cmd.should_skip_conversation() is True
    assert cmd.should_stop_conversation() is False


# -------------------------------------------------------------------
# Drivers
# -------------------------------------------------------------------

def test_set_driver_string_unchanged():
    cmd = Command("hello", greet).set_driver("telegram")
    assert cmd.driver == ["telegram"]


def test_set_driver_class_normalized():
    cmd = Command("hello", greet).set_driver(TelegramDriver)
    assert cmd.driver == ["Telegram"]


def test_set_driver_mixed_list_keeps_order():
    cmd = Command("hello", greet).set_driver([WebDriver, "Slack", NullDriver])
    assert cmd.driver == ["Web", "Slack", "Null"]


def test_set_driver_strips_exact_suffix_only():
    """Only the literal "Driver" suffix is removed."""
    assert normalize_driver(RiverDriver) == "River"


def test_set_driver_replaces_previous_value():
    cmd = Command("hello", greet, driver="Slack").set_driver("Web")
    assert cmd.driver == ["Web"]


def test_normalize_driver_ignores_non_driver_types():
    assert normalize_driver(int) is int
    assert normalize_driver(Driver) is Driver
    assert normalize_driver("SlackDriver") == "SlackDriver"


def test_normalize_driver_honors_name_override():
    class CustomDriver(TelegramDriver):
        name = "tg"

    assert normalize_driver(CustomDriver) == "tg"


# -------------------------------------------------------------------
# Middleware
# -------------------------------------------------------------------

def test_set_middleware_drops_non_conforming_items():
    auth, throttle = Auth(), Throttle()
    cmd = Command("hello", greet).set_middleware([auth, "auth", None, Auth, throttle, 42])
    assert cmd.middleware == [auth, throttle]


def test_set_middleware_single_item():
    auth = Auth()
    cmd = Command("hello", greet).set_middleware(auth)
    assert cmd.middleware == [auth]


def test_set_middleware_single_non_conforming_item_is_dropped():
    cmd = Command("hello", greet).set_middleware("auth")
    assert cmd.middleware == []


def test_set_middleware_prepends_new_items():
    first, second, third = Auth(), Throttle(), Auth()
    cmd = Command("hello", greet).set_middleware([first])
    cmd.set_middleware([second, "nope", third])
    assert cmd.middleware == [second, third, first]


def test_set_middleware_keeps_duplicates():
    auth = Auth()
    cmd = Command("hello", greet)
    cmd.set_middleware([auth])
    cmd.set_middleware([auth])
    assert cmd.middleware == [auth, auth]


# -------------------------------------------------------------------
# Group attributes
# -------------------------------------------------------------------

def test_apply_group_attributes_without_known_keys_is_noop():
    cmd = Command("hello", greet, "alice", "Slack")
    before = cmd.to_dict()
    cmd.apply_group_attributes({"prefix": "admin", "name": "x"})
    assert cmd.to_dict() == before


def test_apply_group_attributes_sets_all_known_keys():
    auth = Auth()
    cmd = Command("hello", greet)
    cmd.apply_group_attributes({
        "middleware": [auth],
        "driver": TelegramDriver,
        "recipient": "alice",
    })
    assert cmd.middleware == [auth]
    assert cmd.driver == ["Telegram"]
    assert cmd.recipient == "alice"


def test_apply_group_attributes_skips_none_values():
    cmd = Command("hello", greet, "alice", "Slack")
    cmd.apply_group_attributes({"driver": None, "recipient": None, "middleware": None})
    assert cmd.driver == "Slack"
    assert cmd.recipient == "alice"
    assert cmd.middleware == []


def test_set_middleware_generator_is_not_a_sequence():
    """Only list, tuple and set input is unpacked."""
    auth = Auth()
    cmd = Command("hello", greet).set_middleware(m for m in [auth])
    assert cmd.middleware == []
