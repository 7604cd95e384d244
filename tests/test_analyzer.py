"""
Skin analyzer and session guard tests
"""
import asyncio
import threading

import pytest

from skin_in.classifier import ModelId, SessionGuard, SkinAnalyzer
from skin_in.utils.exception import AnalysisInProgressError, NotLoadedError


class TestSessionGuard:

    def test_rejects_reentry(self):
        guard = SessionGuard()
        with guard.hold("session-1"):
            assert guard.is_busy("session-1")
            with pytest.raises(AnalysisInProgressError):
                with guard.hold("session-1"):
                    pass
        assert not guard.is_busy("session-1")

    def test_other_sessions_not_blocked(self):
        guard = SessionGuard()
        with guard.hold("a"):
            with guard.hold("b"):
                assert guard.is_busy("a") and guard.is_busy("b")

    def test_anonymous_never_blocked(self):
        guard = SessionGuard()
        with guard.hold(None):
            with guard.hold(None):
                assert not guard.is_busy(None)

    def test_released_after_error(self):
        guard = SessionGuard()
        with pytest.raises(RuntimeError):
            with guard.hold("a"):
                raise RuntimeError("boom")
        assert not guard.is_busy("a")


class TestSkinAnalyzer:

    def test_analyze(self, registry, image_bytes):
        result = asyncio.run(SkinAnalyzer(registry).analyze(image_bytes, "RNN"))
        assert result.condition_label == "Psoriasis Progression"

    def test_unknown_model_type(self, registry, image_bytes):
        with pytest.raises(ValueError, match="Unknown model type"):
            asyncio.run(SkinAnalyzer(registry).analyze(image_bytes, "SVM"))

    def test_not_loaded_checked_before_decoding(self, make_registry):
        registry = make_registry(failing=[ModelId.CNN])
        with pytest.raises(NotLoadedError):
            asyncio.run(SkinAnalyzer(registry).analyze(b"not an image", "CNN"))

    def test_overlapping_request_rejected(self, registry, fake_models, rgb_image):
        release = threading.Event()
        fake_models[ModelId.CNN].before_predict = lambda: release.wait(timeout=5)
        analyzer = SkinAnalyzer(registry)

        async def scenario():
            first = asyncio.create_task(analyzer.analyze(rgb_image, "CNN", session_key="s1"))
            await asyncio.sleep(0)
            try:
                with pytest.raises(AnalysisInProgressError):
                    await analyzer.analyze(rgb_image, "CNN", session_key="s1")
            finally:
                release.set()
            return await first

        result = asyncio.run(scenario())
        assert result.condition == "Psoriasis"
        assert not analyzer.guard.is_busy("s1")

    def test_compare(self, registry, image_bytes):
        comparison = asyncio.run(SkinAnalyzer(registry).compare(image_bytes, session_key="s1"))
        assert comparison.available
        assert len(comparison.results) == 3
