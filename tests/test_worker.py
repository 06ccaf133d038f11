import queue

from gridlogic import config, worker
from gridlogic.worker import run_in_process, solver_worker

ROW = [
    {"type": "EndPoint", "x": 0, "y": 0, "data": {"num": 1}},
    {"type": "FloorCell", "x": 1, "y": 0, "data": {}},
    {"type": "EndPoint", "x": 2, "y": 0, "data": {"num": 1}},
]


def test_solve_mode_puts_the_solution():
    q = queue.Queue()
    solver_worker(config.MODE_SOLVE, ROW, q)
    result = q.get_nowait()
    assert [(o["x"], o["y"], o["data"]["dir"]) for o in result] == [
        (0, 0, "right"),
        (1, 0, "right"),
    ]


def test_deduct_mode():
    q = queue.Queue()
    solver_worker(config.MODE_DEDUCT, ROW, q)
    assert len(q.get_nowait()) == 2


def test_failures_put_none():
    q = queue.Queue()
    solver_worker("BOGUS", ROW, q)
    assert q.get_nowait() is None

    q = queue.Queue()
    solver_worker(config.MODE_SOLVE, ROW[:2], q)
    assert q.get_nowait() is None


def test_run_in_child_process():
    result = run_in_process(config.MODE_SOLVE, ROW, timeout=120)
    assert [(o["x"], o["y"], o["data"]["style"]) for o in result] == [
        (0, 0, "line"),
        (1, 0, "line"),
    ]


class IdleProcess:
    """Stands in for a child process that never reports back."""

    started = []

    def __init__(self, target, args):
        self.target = target
        self.args = args
        self.terminated = False
        self.joined = False
        IdleProcess.started.append(self)

    def start(self):
        pass

    def terminate(self):
        self.terminated = True

    def join(self):
        self.joined = True


def test_timeout_terminates_the_child(monkeypatch):
    monkeypatch.setattr(worker.multiprocessing, "Process", IdleProcess)
    monkeypatch.setattr(worker.multiprocessing, "Queue", queue.Queue)
    IdleProcess.started.clear()

    assert run_in_process(config.MODE_SOLVE, ROW, timeout=0.01) is None
    (process,) = IdleProcess.started
    assert process.target is solver_worker
    assert process.terminated
    assert process.joined
