from abc import ABCMeta, abstractmethod
import wrapt
import weakref

# Messages sent by a SparseSystem while it solves.
SOLVE_START = "solve start"
ITERATION = "iteration"
CONVERGED = "converged"
MESSAGES = (SOLVE_START, ITERATION, CONVERGED)


# Decorator to target specific messages.
def targets(target_messages):
    if isinstance(target_messages, str):
        target_messages = [target_messages]
    unknown = set(target_messages) - set(MESSAGES)
    if unknown:
        raise ValueError("unknown message(s): %s" % ", ".join(sorted(unknown)))

    @wrapt.decorator
    def wrapper(wrapped, instance, args, kwargs):
        if args[0] in target_messages:
            wrapped(*args, **kwargs)

    return wrapper


class Observer(metaclass=ABCMeta):

    @abstractmethod
    def update(self, message, **kwargs):
        pass


class Observable(object):

    def __init__(self):
        self.observers = weakref.WeakSet()

    def register(self, observer):
        self.observers.add(observer)

    def unregister_all(self):
        self.observers.clear()

    def update_observers(self, message, **kwargs):
        for observer in list(self.observers):
            observer.update(message, **kwargs)
