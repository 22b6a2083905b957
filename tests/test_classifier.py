import numpy as np

from stickersheet.models import WhiteThresholdClassifier, is_background
from stickersheet.processors.mask import build_binary_mask

from conftest import fill_rect, white_canvas


def test_white_pixel_is_background():
    assert is_background(255, 255, 255, 255, threshold=230)


def test_transparent_pixel_is_background_whatever_its_colour():
    assert is_background(0, 0, 0, 19, threshold=230)
    assert not is_background(0, 0, 0, 20, threshold=230)


def test_threshold_is_strict():
    assert not is_background(230, 230, 230, 255, threshold=230)
    assert is_background(231, 231, 231, 255, threshold=230)


def test_one_dark_channel_keeps_pixel_in_foreground():
    assert not is_background(250, 250, 100, 255, threshold=230)


def test_vectorized_classifier_matches_pixel_predicate():
    rgba = np.array(
        [[[255, 255, 255, 255], [0, 0, 0, 255], [240, 240, 240, 255]],
         [[10, 10, 10, 5], [236, 250, 236, 255], [250, 120, 250, 255]]],
        dtype=np.uint8,
    )
    classifier = WhiteThresholdClassifier(threshold=235)
    result = classifier.classify(rgba)

    expected = [[is_background(*map(int, px), threshold=235) for px in row] for row in rgba]
    assert result.tolist() == expected


def test_remove_zeroes_alpha_on_a_copy():
    rgba = fill_rect(white_canvas(20, 20), 5, 5, 10, 10)
    original = rgba.copy()

    cut = WhiteThresholdClassifier(threshold=240).remove(rgba)

    assert np.array_equal(rgba, original)
    assert cut[0, 0, 3] == 0
    assert cut[7, 7, 3] == 255
    assert np.array_equal(cut[:, :, :3], rgba[:, :, :3])


def test_binary_mask_marks_foreground_with_ones():
    rgba = fill_rect(white_canvas(30, 20), 3, 4, 8, 9, color=(200, 20, 20))

    mask = build_binary_mask(rgba, threshold=235)

    assert mask.shape == (20, 30)
    assert mask.dtype == np.uint8
    assert mask.sum() == 25
    assert mask[4:9, 3:8].all()
