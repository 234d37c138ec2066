from typing import Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks used while building a climbing report.
    This can be implemented by a host application (GUI, notebook, web
    worker) to follow progress and interrupt a long statistics run.

    Methods:
        report_step(...) -> None:
            Receive progress messages and counters.
        stop_requested() -> bool:
            Tell the pipeline to stop between collectors.
    """
    def report_step(self, info: str = "", target: int = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress from the statistics pipeline.

        Args:
            info (str): Progress message.
            target (int): Total number of steps expected.
            reset_counter (bool): Whether to reset the step counter.
            plus_step (int): Number of steps completed since the last call.
        """
        pass

    def stop_requested(self) -> bool:
        """
        Check if a stop has been requested by the user.

        Returns:
            bool: True if stop is requested, False otherwise.
        """
        return False
