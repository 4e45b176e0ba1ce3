import hashlib

import pytest
import yaml
from file_analysis.hashing import HashState
from file_analysis.models.actions import ActionArgs, ActionType
from file_analysis.results import ActionResults, ResultsRecord


class FakeHashState(HashState):
    """Hash state recording its calls, which tests can invalidate at will."""

    def __init__(self, algorithm: str = "sha256"):
        self._algorithm = algorithm
        self._hasher = hashlib.new(algorithm)
        self.valid = False
        self.released = False
        self.calls: list[str] = []
        self.fed: list[bytes] = []

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def init(self) -> None:
        self.calls.append("init")
        self._hasher = hashlib.new(self._algorithm)
        self.valid = True

    def feed(self, data: bytes) -> bool:
        self.calls.append("feed")
        if not self.valid:
            return False
        self.fed.append(bytes(data))
        self._hasher.update(data)
        return True

    def is_valid(self) -> bool:
        return self.valid

    def get(self) -> str:
        self.calls.append("get")
        return self._hasher.hexdigest()

    def invalidate(self) -> None:
        self.valid = False

    def release(self) -> None:
        self.released = True


class RecordingResultsContext:
    """Results context handing out one record per action arguments, counting assignments."""

    def __init__(self):
        self.records: dict[ActionArgs, ResultsRecord] = {}
        self.assignments: list[tuple[int, object]] = []

    def get_results(self, args: ActionArgs) -> ResultsRecord:
        if args not in self.records:
            record = ResultsRecord(ActionResults)
            original_assign = record.assign

            def assign(idx, value, _assign=original_assign):
                self.assignments.append((idx, value))
                _assign(idx, value)

            record.assign = assign
            self.records[args] = record
        return self.records[args]


@pytest.fixture
def fake_hash_state() -> FakeHashState:
    return FakeHashState()


@pytest.fixture
def results_context() -> RecordingResultsContext:
    return RecordingResultsContext()


@pytest.fixture
def sha256_args() -> ActionArgs:
    return ActionArgs(type=ActionType.SHA256)


@pytest.fixture
def temp_config_file_path(tmp_path):
    config = {"hash": {"algorithms": ["sha1"], "chunk_size": 4}, "progress": False}
    path = tmp_path / "config.yaml"
    with open(path, "w") as fd:
        yaml.safe_dump(config, fd)
    return path


@pytest.fixture
def temp_data_file_path(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog\n" * 100)
    return path
