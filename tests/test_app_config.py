import importlib

from pdf_qa.app import config


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("UPLOAD_DIR", "/tmp/custom_uploads")
    monkeypatch.setenv("MAX_CONTEXT_CHARS", "500")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    try:
        reloaded = importlib.reload(config)
        assert reloaded.UPLOAD_DIR == "/tmp/custom_uploads"
        assert reloaded.MAX_CONTEXT_CHARS == 500
        assert reloaded.PORT == 8080
        assert reloaded.LLM_API_KEY == "sk-test"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_defaults():
    assert config.ACCEPTED_MEDIA_TYPE == "application/pdf"
    assert config.MAX_UPLOAD_BYTES == 5 * 1024 * 1024
    assert config.LLM_MODEL
