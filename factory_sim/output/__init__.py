from factory_sim.output.trace import TraceSink, TraceRecorder, CsvTraceWriter
from factory_sim.output.paths import output_paths, outputs_exist

__all__ = ["TraceSink", "TraceRecorder", "CsvTraceWriter", "output_paths", "outputs_exist"]
