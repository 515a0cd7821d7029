import numpy as np
import pytest

from core.detector import SignDetector, decode_predictions, preprocess
from domain.errors import ModelLoadError
from domain.models import RawDetection


def test_decode_batched_output():
    out = np.array([[
        [0, 0, 10, 10, 0.9, 0],
        [5, 5, 20, 20, 0.4, 25],
    ]], dtype=np.float32)

    dets = decode_predictions(out)

    assert len(dets) == 2
    assert isinstance(dets[0], RawDetection)
    assert dets[0].box == (0.0, 0.0, 10.0, 10.0)
    assert dets[0].score == pytest.approx(0.9)
    assert dets[0].class_id == 0
    assert dets[1].class_id == 25
    assert isinstance(dets[1].class_id, int)


def test_decode_float_class_column_becomes_int():
    dets = decode_predictions(np.array([[0, 0, 1, 1, 0.9, 3.0]], dtype=np.float32))
    assert dets[0].class_id == 3
    assert isinstance(dets[0].class_id, int)


def test_decode_unbatched_and_extra_columns():
    out = np.array([[1, 2, 3, 4, 0.5, 7, 99.0]])
    dets = decode_predictions(out)
    assert len(dets) == 1
    assert dets[0].box == (1.0, 2.0, 3.0, 4.0)
    assert dets[0].class_id == 7


def test_decode_single_flat_row():
    assert len(decode_predictions([0, 0, 1, 1, 0.7, 3])) == 1


def test_decode_skips_non_finite_rows():
    out = np.array([[0, 0, 1, 1, np.nan, 3], [0, 0, 1, 1, 0.8, 4]])
    dets = decode_predictions(out)
    assert [d.class_id for d in dets] == [4]


@pytest.mark.parametrize("class_id", [-0.4, 24.6, 0.5])
def test_decode_skips_fractional_class_ids(class_id):
    out = np.array([[0, 0, 1, 1, 0.9, class_id], [0, 0, 1, 1, 0.8, 2]])
    dets = decode_predictions(out)
    assert [d.class_id for d in dets] == [2]


def test_decode_keeps_out_of_table_integral_ids_for_observe_to_reject():
    dets = decode_predictions([0, 0, 1, 1, 0.9, 26])
    assert [d.class_id for d in dets] == [26]


@pytest.mark.parametrize("bad", [None, np.zeros((3, 4)), np.zeros((2, 3, 6)), np.zeros(5)])
def test_decode_unexpected_shapes_give_nothing(bad):
    assert decode_predictions(bad) == []


def test_decode_empty_batch():
    assert decode_predictions(np.zeros((1, 0, 6))) == []


def test_preprocess_shape_and_range():
    frame = np.full((480, 640, 3), 255, dtype=np.uint8)
    blob = preprocess(frame, (512, 512))
    assert blob.shape == (1, 3, 512, 512)
    assert blob.dtype == np.float32
    assert blob.max() == pytest.approx(1.0)


def test_preprocess_swaps_to_rgb():
    frame = np.zeros((64, 64, 3), dtype=np.uint8)
    frame[..., 0] = 255   # blue in BGR
    blob = preprocess(frame, (32, 32))
    assert blob[0, 0].max() == 0.0
    assert blob[0, 2].min() == pytest.approx(1.0)


def test_missing_model_is_a_load_error(tmp_path):
    with pytest.raises(ModelLoadError):
        SignDetector(tmp_path / "missing.onnx")


def test_corrupt_model_is_a_load_error(tmp_path):
    bogus = tmp_path / "bogus.onnx"
    bogus.write_bytes(b"not a network")
    with pytest.raises(ModelLoadError):
        SignDetector(bogus)
