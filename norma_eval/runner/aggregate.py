from typing import List

from norma_eval.context import RunContext, RunRecord


def add_result(ctx: RunContext, record: RunRecord) -> List[str]:
    """Append a record to the context and reprint the whole summary.

    Returns the printed summary lines: the header plus one line per record,
    in insertion order.
    """
    ctx.records.append(record)
    lines = ctx.summary_lines()
    print("\n".join(lines), flush=True)
    return lines
