"""Timing logger for integration & simplification.

```
import symtree as st
from symtree.debug.logger import Logger
from symtree.integration import Integration

logger = Logger()
Integration.logger = logger

# do some integration as normal...
x = st.symbols('x')
st.integrate(x ** 2, x)

logger.dump()   # dumps information into symtree_log.txt
logger.plot()   # creates a bar chart of call times in symtree_log.png (needs matplotlib)
```

The same logger can be hung on symtree.simplify.Simplifier.logger.
"""

import time
from typing import Dict, NamedTuple

from ..expr import Expr


class Datum(NamedTuple):
    expr: Expr
    time_spent: float
    detail: str


class Logger:
    """Keeps track of time spent per top-level call, keyed by the input's canonical text."""

    _data: Dict[str, Datum] = None

    def __init__(self):
        self._data = {}

    def log(self, expr: Expr, time_spent: float, detail: str = ""):
        """Log an entry.

        expr: the input (integrand, expression being simplified)
        time_spent: in seconds
        detail: anything worth printing next to it, ex. the number of passes
        """
        self._data[repr(expr)] = Datum(expr, time_spent, detail)

    @property
    def data(self) -> Dict[str, Datum]:
        return self._data

    def sort(self):
        """sorts the data by time spent, from most time to least time."""
        self._data = dict(sorted(self._data.items(), key=lambda x: x[1].time_spent, reverse=True))

    def dump(self, path: str = "symtree_log.txt"):
        self.sort()

        with open(path, "w") as f:
            f.write("Expression: time taken (s)")
            f.write("\n\n")
            for k, v in self._data.items():
                line = f"{k}: {v.time_spent}"
                if v.detail:
                    line += f" ({v.detail})"
                f.write(line + "\n")

    def plot(self, path: str = "symtree_log.png"):
        import matplotlib.pyplot as plt

        self.sort()
        x = list(self._data.keys())
        y = [v.time_spent for v in self._data.values()]
        plt.bar(x, y)
        plt.ylabel("Time taken (s)")
        plt.xticks(rotation=90)  # rotate labels vertically
        plt.tight_layout()  # automatically adjust spacing (needed to show the entirety of the vertical labels)
        plt.savefig(path)


def log_time(logger: Logger):
    """Decorator that logs how long func takes, keyed by its first argument."""

    def decorator(func):
        def wrapper(expr: Expr, *args, **kwargs):
            start = time.time()
            result = func(expr, *args, **kwargs)
            logger.log(expr, time.time() - start, func.__name__)
            return result

        return wrapper

    return decorator
