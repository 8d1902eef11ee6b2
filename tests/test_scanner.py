"""
Тесты сканирования QR-кодов
"""
import io
import pytest
from unittest.mock import MagicMock

from registry.exceptions import RequiredFieldError, ScanError
from registry.models import VerificationStatus
from registry.scanner import QRDecoder, ScanController, ScanSource


class FakeCamera(ScanSource):
    """Камера, кадры которой подает сам тест"""

    def __init__(self, fail_on_start=False, fail_on_stop=False):
        self.fail_on_start = fail_on_start
        self.fail_on_stop = fail_on_stop
        self.on_decoded = None
        self.stopped = 0

    def start(self, on_decoded):
        if self.fail_on_start:
            raise RuntimeError("Camera permission denied")
        self.on_decoded = on_decoded

    def stop(self):
        self.stopped += 1
        if self.fail_on_stop:
            raise RuntimeError("Camera busy")

    def show(self, text):
        self.on_decoded(text)


@pytest.fixture
def controller(state):
    return ScanController(state.verification, decoder=MagicMock(spec=QRDecoder))


class TestScanController:
    """Тесты сессий сканирования"""

    def test_decoded_text_is_verified(self, controller, state):
        camera = FakeCamera()
        results = []

        controller.start(camera, on_result=results.append, ip_address="10.0.0.5")
        camera.show("EL-STANFORD-2023-731")

        assert results[0].certificate.id == "EL-STANFORD-2023-731"
        assert state.audit_log.list()[0].ip_address == "10.0.0.5"

    def test_successful_scan_stops_session(self, controller):
        camera = FakeCamera()

        controller.start(camera)
        camera.show("unknown")

        assert not controller.is_scanning
        assert camera.stopped == 1

    def test_frames_after_stop_are_ignored(self, controller, state):
        camera = FakeCamera()

        controller.start(camera)
        camera.show("CO-MIT-2023-482")
        camera.show("CO-MIT-2023-482")

        assert len(state.audit_log) == 1

    def test_start_stops_previous_session(self, controller):
        first, second = FakeCamera(), FakeCamera()

        controller.start(first)
        controller.start(second)

        assert first.stopped == 1
        assert second.stopped == 0
        assert controller.is_scanning

    def test_empty_qr_code_goes_to_on_error(self, controller, state):
        errors = []

        camera = FakeCamera()
        controller.start(camera, on_error=errors.append)
        camera.show("   ")

        assert isinstance(errors[0], RequiredFieldError)
        assert len(state.audit_log) == 0

    def test_empty_qr_code_without_handler_raises(self, controller):
        camera = FakeCamera()
        controller.start(camera)

        with pytest.raises(RequiredFieldError):
            camera.show("")

    def test_failed_start(self, controller):
        with pytest.raises(ScanError):
            controller.start(FakeCamera(fail_on_start=True))

        assert not controller.is_scanning

    def test_failed_stop_still_ends_session(self, controller):
        camera = FakeCamera(fail_on_stop=True)
        controller.start(camera)

        controller.stop()

        assert not controller.is_scanning
        assert camera.stopped == 1

    def test_scan_file(self, controller):
        controller.decoder.decode.return_value = "PH-OXFORD-2022-215"

        result = controller.scan_file(b"image bytes")

        assert result.status is VerificationStatus.SUCCESS
        controller.decoder.decode.assert_called_once_with(b"image bytes")

    def test_scan_file_decode_error_is_not_logged(self, controller, state):
        controller.decoder.decode.side_effect = ScanError("QR-код на изображении не найден")

        with pytest.raises(ScanError):
            controller.scan_file(b"image bytes")

        assert len(state.audit_log) == 0


class TestQRDecoder:
    """Тесты распознавания QR-кодов"""

    def test_garbage_bytes(self):
        with pytest.raises(ScanError):
            QRDecoder().decode(b"definitely not an image")

    def test_decode_generated_qr_code(self):
        pytest.importorskip("pyzbar.pyzbar")
        qrcode = pytest.importorskip("qrcode")

        buffer = io.BytesIO()
        qrcode.make("CO-MIT-2023-482").save(buffer)

        assert QRDecoder().decode(buffer.getvalue()) == "CO-MIT-2023-482"

    def test_image_without_qr_code(self):
        pytest.importorskip("pyzbar.pyzbar")
        from PIL import Image

        with pytest.raises(ScanError):
            QRDecoder().decode(Image.new("RGB", (200, 200), "white"))
