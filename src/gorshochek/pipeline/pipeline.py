"""Sequential task runner."""

import logging
from collections.abc import Callable, Iterable

from gorshochek.model import Model

logger = logging.getLogger(__name__)

TaskCallable = Callable[[Model], Model]


class Pipeline:
    """Runs tasks over a model one after another.

    Each task receives the model returned by the previous one. The first
    exception stops the run and propagates to the caller.

    Attributes:
        model: The model being built
        tasks: Ordered list of tasks
    """

    def __init__(self, model: Model | None = None, tasks: Iterable[TaskCallable] = ()):
        self.model = model if model is not None else Model()
        self.tasks: list[TaskCallable] = list(tasks)

    def __repr__(self) -> str:
        return f"Pipeline({len(self.tasks)} tasks, {self.model!r})"

    def add_task(self, task: TaskCallable) -> "Pipeline":
        self.tasks.append(task)
        return self

    def run(self) -> Model:
        """Run all tasks in order.

        Returns:
            The resulting model
        """
        model = self.model
        for task in self.tasks:
            stage = getattr(task, "name", None) or getattr(task, "__name__", repr(task))
            logger.info(f"Running task: {stage}")
            result = task(model)
            if result is not None:
                model = result
        self.model = model
        logger.info(f"Pipeline complete: {len(model.get_pages())} pages")
        return model
