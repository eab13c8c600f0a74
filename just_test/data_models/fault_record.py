# just_test/data_models/fault_record.py
# FaultRecord data class for runtime faults seen by the error interceptor.

from dataclasses import dataclass

from just_test.severity import label_for, is_fatal


@dataclass(frozen=True)
class FaultRecord:
    """
    A runtime fault classified by severity.

    Fields:
      severity -- Severity code (see just_test.severity). Unknown codes are
                  kept as-is and render with the "Unknown error" label.
      message  -- Fault message.
      file     -- File the fault originated in, or "unknown".
      line     -- Line number in that file, or 0.
    """
    severity: int
    message:  str
    file:     str
    line:     int

    @property
    def label(self) -> str:
        return label_for(self.severity)

    @property
    def is_fatal(self) -> bool:
        return is_fatal(self.severity)

    def render(self) -> str:
        return f"{self.label}: {self.message} in {self.file} on line {self.line}"
