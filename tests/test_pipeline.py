import asyncio

from bag_verifier.engine.images import UploadedImage
from bag_verifier.engine.pipeline import verify_batch
from bag_verifier.engine.serial import REASON_NOT_OBSERVED, REASON_TEXT_EXTRACTED, REASON_UNREADABLE
from bag_verifier.ocr.client import UnavailableOcrClient

BASE_FILES = [
    "front.jpg",
    "back.jpg",
    "side.jpg",
    "bottom.jpg",
    "top.jpg",
    "interior.jpg",
    "stamp.jpg",
    "zipper.jpg",
    "handle.jpg",
    "stitch.jpg",
]

SERIAL_REASONS = {REASON_TEXT_EXTRACTED, REASON_UNREADABLE, REASON_NOT_OBSERVED}


class _FakeOcr:
    def __init__(self, text):
        self.text = text
        self.calls = 0

    def extract_text(self, image_bytes):
        self.calls += 1
        return self.text


def _image(name, size=200_000):
    return UploadedImage.from_bytes(name, b"\x00" * size, "image/jpeg")


def _run(images, labels=None, ocr=None):
    return asyncio.run(verify_batch(images, labels or {}, ocr or UnavailableOcrClient()))


def test_complete_good_batch_is_likely_authentic():
    result = _run([_image(name) for name in BASE_FILES])

    assert result.verdict == "Likely Authentic"
    assert result.confidence == 75
    assert result.missing_photos == []
    assert result.red_flags == []
    assert result.reasons[0] == "All required views present; no universal red flags"
    assert result.certificate.certificate_eligible is True


def test_low_quality_images_are_excluded_from_coverage():
    small = {"front.jpg", "interior.jpg", "zipper.jpg", "stitch.jpg"}
    images = [_image(name, 50_000 if name in small else 200_000) for name in BASE_FILES]

    result = _run(images)

    assert result.verdict == "Inconclusive"
    assert result.confidence == 30
    assert result.missing_photos == ["front", "interior", "hardware", "stitching"]
    assert sorted(result.red_flags) == sorted(f"Low-quality image: {n}" for n in small)
    assert result.reasons[0] == "Missing or unclear required views"


def test_boundary_sizes():
    images = [_image(name) for name in BASE_FILES[1:]]

    at_threshold = _run(images + [_image("front.jpg", 60_000)])
    assert at_threshold.missing_photos == []
    assert at_threshold.red_flags == []

    below = _run(images + [_image("front.jpg", 59_999)])
    assert below.missing_photos == ["front"]
    assert below.red_flags == ["Low-quality image: front.jpg"]


def test_unlabelled_low_quality_image_is_still_flagged():
    images = [_image(name) for name in BASE_FILES] + [_image("img7.jpg", 1_000)]
    result = _run(images)
    assert result.verdict == "Likely Authentic"
    assert result.red_flags == ["Low-quality image: img7.jpg"]


def test_explicit_labels_cover_views():
    images = [_image(f"img{i}.jpg") for i in range(10)]
    labels = {f"img{i}.jpg": view for i, view in enumerate(
        ["front", "back", "side", "bottom", "top", "interior",
         "logo_stamp", "hardware", "handle_base", "stitching"]
    )}

    result = _run(images, labels)

    assert result.verdict == "Likely Authentic"
    assert result.missing_photos == []


def test_empty_batch_is_inconclusive():
    result = _run([])
    assert result.verdict == "Inconclusive"
    assert result.confidence == 30
    assert len(result.missing_photos) == 10
    assert REASON_NOT_OBSERVED in result.reasons


def test_exactly_one_serial_reason_and_one_ocr_call():
    ocr = _FakeOcr("SD1024")
    images = [_image(name) for name in BASE_FILES] + [_image("serial.jpg")]

    result = _run(images, ocr=ocr)

    assert ocr.calls == 1
    assert [r for r in result.reasons if r in SERIAL_REASONS] == [REASON_TEXT_EXTRACTED]


def test_unclear_serial_image_is_flagged_and_not_read():
    ocr = _FakeOcr("SD1024")
    images = [_image(name) for name in BASE_FILES if name != "stamp.jpg"]
    images.append(_image("stamp.jpg", 70_000))

    result = _run(images, ocr=ocr)

    assert ocr.calls == 0
    assert result.red_flags == ["Serial/date code image present but unclear: stamp.jpg"]
    assert REASON_UNREADABLE in result.reasons
    assert result.verdict == "Likely Authentic"


def test_brand_rule_match_adds_reason():
    images = [_image(f"lv_{name}") for name in BASE_FILES]
    result = _run(images, ocr=_FakeOcr("sd-1024"))

    assert result.verdict == "Likely Authentic"
    assert "Louis Vuitton date code format is consistent" in result.reasons
    assert result.certificate.brand == "Louis Vuitton"


def test_model_rules_escalate_rejection_confidence():
    sizes = {"stamp.jpg": 70_000, "interior.jpg": 100_000}
    images = [_image(f"lv_{name}", sizes.get(name, 200_000)) for name in BASE_FILES]
    images[0] = _image("lv_neverfull_front.jpg")
    images.append(_image("lv_serial.jpg"))

    result = _run(images, ocr=_FakeOcr("XYZ1234567"))

    assert result.verdict == "Likely Not Authentic"
    assert result.confidence == 85
    assert result.red_flags == [
        "Serial/date code image present but unclear: lv_stamp.jpg",
        "Louis Vuitton date code format is inconsistent: XYZ1234567",
        "Neverfull: interior view missing or below good quality",
    ]
    assert result.reasons[0] == "Multiple technical inconsistencies detected"
    assert result.certificate.item_name == "Neverfull"
    assert result.certificate.certificate_eligible is False


def test_rejection_without_model_rules_uses_baseline_confidence():
    images = [_image(name) for name in BASE_FILES]
    images += [_image(f"extra{i}.jpg", 100) for i in range(3)]

    result = _run(images)

    assert result.verdict == "Likely Not Authentic"
    assert result.confidence == 65
