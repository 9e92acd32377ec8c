# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable, Iterable
from typing import Any


class Repeater:
    """
    Execute a given function repeatedly for a collection of items,
    with optional per-exception handling and tracking of encountered errors.

    Items may be a lazy iterable; they are consumed exactly once.

    Attributes:
        items (Iterable[Any]): Items to process.
        encountered_errors (dict[int, BaseException]): A dictionary mapping
            item indices to exceptions encountered during execution.
        current_iteration (int): The index of the item currently being processed.

    Args:
        items (Iterable[Any]): Items to iterate over.
        func (Callable): Function to execute for each item. The item will be passed
            as the first argument, followed by any `*args` and `**kwargs`.
        *args (Any): Positional arguments forwarded to `func`.
        **kwargs (Any): Keyword arguments forwarded to `func`.
    """

    def __init__(
        self,
        items: Iterable[Any],
        func: Callable,
        *args: Any,
        **kwargs: Any,
    ):
        self.encountered_errors: dict[int, BaseException] = {}
        self.items = items
        self.current_iteration = 0

        self._handlers: dict[type[BaseException], Callable[..., Any]] = {}
        self._func = func
        self._args = args
        self._kwargs = kwargs

    def onException(self, exc_type: type[BaseException], handler: Callable) -> None:
        """
        Register a handler function for a specific exception type.

        Handlers registered for a base class also catch its subclasses.

        Args:
            exc_type (type[BaseException]): The exception type to handle.
            handler (Callable): Function to call when `exc_type` is raised.
                The handler must accept three arguments:
                - BaseException: The caught exception instance.
                - Any: The item that was being processed.
                - Repeater: Reference to this `Repeater` instance.
        """
        self._handlers[exc_type] = handler

    def run(self) -> None:
        """
        Execute the target function for all items, invoking handlers for exceptions.

        Unhandled exceptions propagate normally and interrupt the iteration.

        Exceptions are recorded in `encountered_errors`, mapping the item's
        index to the raised exception instance.
        """
        for i, item in enumerate(self.items):
            self.current_iteration = i
            try:
                self._func(item, *self._args, **self._kwargs)
            except tuple(self._handlers.keys()) as e:
                self.encountered_errors[i] = e
                self._handlerFor(e)(e, item, self)

    def _handlerFor(self, exception: BaseException) -> Callable[..., Any]:
        # exact match first, then the closest registered base class
        if type(exception) in self._handlers:
            return self._handlers[type(exception)]

        for cls in type(exception).__mro__:
            if cls in self._handlers:
                return self._handlers[cls]

        raise exception
