import threading
import time
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from rules.rules import BOX_SIZE, MAX_BOX_SIZE, MAX_MIN_VALUE, MIN_BOX_SIZE, MIN_VALUE
from sudoku_bf.codec import apply_encoding, encode_grid, format_grid_rows
from sudoku_bf.grid import Grid
from sudoku_bf.solver import count_solutions


class DecodeRequest(BaseModel):
    encoding: str = Field(..., description="Cells in row-major order, '1'.. for values and '0' for unknown cells")
    box_size: int = Field(default=BOX_SIZE, ge=MIN_BOX_SIZE, le=MAX_BOX_SIZE, description="Side length of a subsquare")
    min_value: int = Field(default=MIN_VALUE, ge=0, le=MAX_MIN_VALUE, description="Cell value that '1' decodes to")
    strict: bool = Field(default=False, description="Reject encodings of the wrong length or with repeated values")


class DecodeResponse(BaseModel):
    encoding: str
    grid_rows: list[str]
    grid_text: str
    unknown_cells: int
    decode_conflict: Optional[list[int]] = None


class CountRequest(DecodeRequest):
    solution_limit: int = Field(default=0, ge=0, le=1000, description="Number of solution encodings to return")
    trace: bool = Field(default=False, description="Include solver trace output in the response")
    trace_max_lines: int = Field(default=1000, ge=1, le=20000, description="Maximum number of trace lines to return.")


class CountResponse(BaseModel):
    count: int
    nodes_visited: int
    placements: int
    unknown_cells: int
    decode_conflict: Optional[list[int]] = None
    solutions: list[str]
    message: str
    trace: Optional[list[str]] = None


class CountJobStartResponse(BaseModel):
    job_id: str
    status: str


class CountJobStatusResponse(BaseModel):
    job_id: str
    status: str
    elapsed_seconds: float
    nodes_visited: int
    lower_bound: int
    count: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None


app = FastAPI(
    title="Sudoku Brute Force API",
    description="Count every completion of a generalized Sudoku grid by exhaustive backtracking.",
    version="0.1.0",
)

_COUNT_JOBS: dict[str, dict] = {}
_COUNT_JOBS_LOCK = threading.Lock()
_MAX_FINISHED_JOBS = 100
_FINISHED_STATUSES = {"completed", "failed"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/decode", response_model=DecodeResponse)
def decode(request: DecodeRequest) -> DecodeResponse:
    try:
        grid = Grid(box_size=request.box_size, min_value=request.min_value)
        conflict = apply_encoding(grid, request.encoding, strict=request.strict)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    grid_rows = format_grid_rows(grid)
    return DecodeResponse(
        encoding=encode_grid(grid),
        grid_rows=grid_rows,
        grid_text="\n".join(grid_rows),
        unknown_cells=grid.unknown_count(),
        decode_conflict=None if conflict is None else list(conflict),
    )


@app.post("/count", response_model=CountResponse)
def count(request: CountRequest) -> CountResponse:
    trace_log: list[str] = []
    try:
        result = count_solutions(
            encoding=request.encoding,
            box_size=request.box_size,
            min_value=request.min_value,
            strict=request.strict,
            solution_limit=request.solution_limit,
            trace=request.trace,
            trace_log=trace_log,
            trace_max_lines=request.trace_max_lines,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return CountResponse(**result, trace=trace_log if request.trace else None)


@app.post("/count/jobs/start", response_model=CountJobStartResponse, status_code=status.HTTP_202_ACCEPTED)
def count_start(request: CountRequest) -> CountJobStartResponse:
    job_id = str(uuid.uuid4())
    job = {
        "job_id": job_id,
        "status": "queued",
        "created_at": time.time(),
        "started_at": None,
        "completed_at": None,
        "request": request.model_dump(),
        "result": None,
        "lower_bound": 0,
        "nodes_visited": 0,
        "error": None,
    }

    with _COUNT_JOBS_LOCK:
        _evict_finished_jobs()
        _COUNT_JOBS[job_id] = job

    thread = threading.Thread(target=_run_count_job, args=(job_id,), daemon=True)
    thread.start()

    return CountJobStartResponse(job_id=job_id, status="queued")


@app.get("/count/jobs/{job_id}", response_model=CountJobStatusResponse)
def count_status(job_id: str) -> CountJobStatusResponse:
    with _COUNT_JOBS_LOCK:
        job = _COUNT_JOBS.get(job_id)
        if job is None:
            raise HTTPException(status_code=404, detail="count job not found")
        return _build_job_status_response(job)


def _run_count_job(job_id: str) -> None:
    with _COUNT_JOBS_LOCK:
        job = _COUNT_JOBS.get(job_id)
        if job is None:
            return
        job["status"] = "running"
        job["started_at"] = time.time()
        request_data = job["request"]

    def on_progress(progress: dict[str, int]) -> None:
        with _COUNT_JOBS_LOCK:
            in_memory_job = _COUNT_JOBS.get(job_id)
            if in_memory_job is None:
                return
            in_memory_job["lower_bound"] = progress.get("solutions_found", in_memory_job["lower_bound"])
            in_memory_job["nodes_visited"] = max(
                in_memory_job["nodes_visited"],
                progress.get("nodes_visited", in_memory_job["nodes_visited"]),
            )

    try:
        result = count_solutions(
            encoding=request_data["encoding"],
            box_size=request_data["box_size"],
            min_value=request_data["min_value"],
            strict=request_data["strict"],
            progress_callback=on_progress,
        )
    except ValueError as exc:
        _fail_count_job(job_id, str(exc))
        return
    except Exception as exc:  # pragma: no cover
        _fail_count_job(job_id, f"unexpected error: {exc}")
        return

    with _COUNT_JOBS_LOCK:
        in_memory_job = _COUNT_JOBS.get(job_id)
        if in_memory_job is None:
            return
        in_memory_job["result"] = result
        in_memory_job["status"] = "completed"
        in_memory_job["lower_bound"] = int(result["count"])
        in_memory_job["nodes_visited"] = int(result["nodes_visited"])
        in_memory_job["completed_at"] = time.time()


def _evict_finished_jobs() -> None:
    # caller holds _COUNT_JOBS_LOCK; running jobs are never evicted
    finished = sorted(
        (job for job in _COUNT_JOBS.values() if job["status"] in _FINISHED_STATUSES),
        key=lambda job: job["completed_at"],
    )
    for job in finished[: max(0, len(finished) - _MAX_FINISHED_JOBS)]:
        del _COUNT_JOBS[job["job_id"]]


def _fail_count_job(job_id: str, error: str) -> None:
    with _COUNT_JOBS_LOCK:
        in_memory_job = _COUNT_JOBS.get(job_id)
        if in_memory_job is None:
            return
        in_memory_job["status"] = "failed"
        in_memory_job["error"] = error
        in_memory_job["completed_at"] = time.time()


def _build_job_status_response(job: dict) -> CountJobStatusResponse:
    now = time.time()
    if job["started_at"] is None:
        elapsed_seconds = 0.0
    elif job["completed_at"] is None:
        elapsed_seconds = now - job["started_at"]
    else:
        elapsed_seconds = job["completed_at"] - job["started_at"]

    result = job["result"] or {}
    return CountJobStatusResponse(
        job_id=job["job_id"],
        status=job["status"],
        elapsed_seconds=elapsed_seconds,
        nodes_visited=job.get("nodes_visited", 0),
        lower_bound=job.get("lower_bound", 0),
        count=result.get("count"),
        message=result.get("message"),
        error=job.get("error"),
    )
