import msgspec

from nonexhaustive import Effect


class State(msgspec.Struct):
    number: int = 0
    text: str = ""


class OnAppear(msgspec.Struct, frozen=True):
    pass


class Response1(msgspec.Struct, frozen=True):
    value: int


class Response2(msgspec.Struct, frozen=True):
    value: str


class Noop(msgspec.Struct, frozen=True):
    pass


def feature_reducer(state: State, action, environment) -> Effect:
    match action:
        case OnAppear():
            state.number = 0
            state.text = ""
            return Effect.merge(
                Effect.just(Response1(42)),
                Effect.just(Response2("Hello")),
            )
        case Response1(value=value):
            state.number = value
        case Response2(value=value):
            state.text = value
    return Effect.none()
