# scheduling/__init__.py

from .scheduler import Scheduler, LoopScheduler
from .debounce import Debounce
from .throttle import Throttle

__all__ = ['Scheduler', 'LoopScheduler', 'Debounce', 'Throttle']
