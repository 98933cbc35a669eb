from dataclasses import dataclass

from nonexhaustive import Effect


@dataclass
class CounterState:
    count: int = 0
    is_even: bool = True


@dataclass(frozen=True)
class Increment:
    pass


@dataclass(frozen=True)
class Decrement:
    pass


def counter_reducer(state: CounterState, action, environment) -> Effect:
    match action:
        case Increment():
            state.count += 1
            state.is_even = not state.is_even
        case Decrement():
            state.count -= 1
            state.is_even = not state.is_even
    return Effect.none()
