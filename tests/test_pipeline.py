import pytest

from core.accumulator import TextAccumulator
from core.pipeline import FramePipeline
from domain.models import RawDetection


class FakeDetector:
    """Returns a scripted list of detections per call."""

    def __init__(self, frames):
        self._frames = list(frames)

    def detect(self, frame):
        return self._frames.pop(0)


class BrokenDetector:
    def detect(self, frame):
        raise RuntimeError("backend fell over")


def det(box, score, class_id):
    return RawDetection(box=box, score=score, class_id=class_id)


def test_overlapping_duplicates_spell_one_letter():
    acc = TextAccumulator()
    pipeline = FramePipeline(None, acc, score_threshold=0.85, iou_threshold=0.5)

    result = pipeline.process_detections([
        det((0, 0, 10, 10), 0.9, 0),
        det((0, 0, 9, 9), 0.8, 0),
    ])

    assert [d.score for d in result.accepted] == [0.9]
    assert result.observed_class_id == 0
    assert acc.tick() == "A"
    assert acc.output_text == "A"


def test_low_confidence_is_not_observed_but_still_rendered():
    acc = TextAccumulator()
    pipeline = FramePipeline(None, acc, score_threshold=0.85)

    result = pipeline.process_detections([det((0, 0, 10, 10), 0.6, 3)])

    assert result.observed_class_id is None
    assert len(result.accepted) == 1
    assert result.visible == []
    assert acc.latest_class_id is None


def test_empty_frame_keeps_previous_sighting():
    acc = TextAccumulator()
    pipeline = FramePipeline(FakeDetector([[det((0, 0, 5, 5), 0.95, 2)], []]), acc)

    pipeline.process("frame-1")
    result = pipeline.process("frame-2")

    assert result.accepted == []
    assert result.top is None
    assert acc.tick() == "C"


def test_frames_between_ticks_are_debounced():
    acc = TextAccumulator()
    frames = [[det((0, 0, 5, 5), 0.95, 1)]] * 10 + [[det((0, 0, 5, 5), 0.95, 2)]]
    pipeline = FramePipeline(FakeDetector(frames), acc)

    for i in range(len(frames)):
        pipeline.process(i)

    acc.tick()
    assert acc.output_text == "C"


def test_inference_failure_degrades_to_no_observation(capsys):
    acc = TextAccumulator()
    acc.observe(4)
    pipeline = FramePipeline(BrokenDetector(), acc)

    result = pipeline.process("frame")

    assert result.failed
    assert result.accepted == []
    assert acc.latest_class_id == 4
    assert "[WARN]" in capsys.readouterr().out


def test_process_without_detector_raises():
    with pytest.raises(RuntimeError):
        FramePipeline(None, TextAccumulator()).process("frame")


def test_result_carries_threshold():
    pipeline = FramePipeline(None, TextAccumulator(), score_threshold=0.7)
    result = pipeline.process_detections([det((0, 0, 1, 1), 0.75, 0)])
    assert result.score_threshold == 0.7
    assert result.visible == result.accepted


def test_inference_failure_goes_to_the_report_hook_once(capsys):
    lines = []
    pipeline = FramePipeline(BrokenDetector(), TextAccumulator(), report=lines.append)

    pipeline.process("frame")

    assert len(lines) == 1
    assert lines[0].startswith("[WARN]")
    assert capsys.readouterr().out == ""
