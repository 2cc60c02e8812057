'''Common functionality for components.

Functions to build function registers and retrievers around them, so that
components such as remainder distribution strategies can be referenced by
string name. There should normally be no need to use these functions directly.
'''

from typing import Callable, Dict, Tuple, Union

Register = Dict[str, Callable]


def marker(register: Register) -> Callable[[Callable], Callable]:
    '''A registration decorator factory.

    The decorated function is registered under its own name; registering
    two functions of the same name into one register is an error.
    '''
    def mark_function(func: Callable) -> Callable:
        if func.__name__ in register:
            raise ValueError(f'duplicate registration: {func.__name__}')
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Register, kind: str) -> Callable[[str], Callable]:
    '''A register retriever factory.

    :param kind: What the register holds, used in error messages.
    '''
    def get(func_name: str) -> Callable:
        try:
            return register[func_name]
        except KeyError:
            raise KeyError(f'unknown {kind}: {func_name}')
    get.__doc__ = f'Return a {kind} function by its name.'
    return get


def constructer(register: Register,
                kind: str,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''A register implicit retriever/passthrough function factory.'''
    get = getter(register, kind)

    def construct(func_def: Union[str, Callable]) -> Callable:
        return func_def if callable(func_def) else get(func_def)

    construct.__doc__ = (
        f'Construct a {kind} function.\n\n'
        f'Get a {kind} function by its name from the register. If a custom\n'
        'callable is given, pass it through unchanged.'
    )
    return construct


def register_functions(register: Register,
                       kind: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register),
        getter(register, kind),
        constructer(register, kind),
    )
