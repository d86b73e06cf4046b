"""Registry for relaxation solver implementations.

Uses a decorator pattern for registration. ``build()`` instantiates the
solver named by ``config.solver_type``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from logit_bubbles.layout.base import RelaxationSolver


class SolverRegistry:
    """Registry mapping string names to RelaxationSolver classes.

    Built-in solvers register via the ``@SolverRegistry.register()``
    decorator when ``logit_bubbles.layout`` is imported.
    """

    _registry: ClassVar[dict[str, type[RelaxationSolver]]] = {}

    @classmethod
    def register(
        cls, name: str
    ) -> Callable[[type[RelaxationSolver]], type[RelaxationSolver]]:
        """Decorator that registers a RelaxationSolver class under *name*.

        Args:
            name: Identifier used in config ``solver_type``.

        Returns:
            Decorator that registers the class and returns it unchanged.

        Raises:
            ValueError: If *name* is already registered.
        """

        def decorator(klass: type[RelaxationSolver]) -> type[RelaxationSolver]:
            if name in cls._registry:
                raise ValueError(f"Relaxation solver '{name}' is already registered")
            cls._registry[name] = klass
            return klass

        return decorator

    @classmethod
    def get(cls, name: str) -> type[RelaxationSolver]:
        """Return the solver class registered under *name*.

        Raises:
            KeyError: If *name* is not registered.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown relaxation solver '{name}'. Available: {available}")
        return cls._registry[name]

    @classmethod
    def build(cls, config: Any) -> RelaxationSolver:
        """Instantiate the solver specified by *config.solver_type*.

        Args:
            config: A BubbleChartConfig (or compatible object) with a
                ``solver_type`` attribute.

        Returns:
            A new, unconfigured solver with no nodes.
        """
        return cls.get(config.solver_type)()

    @classmethod
    def list_registered(cls) -> list[str]:
        """Return sorted list of registered solver names."""
        return sorted(cls._registry)
