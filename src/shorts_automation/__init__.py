"""
Shorts Automation – ports/adapters pipeline for AI-generated short videos.

Typical use:
  from shorts_automation.config import load_settings
  from shorts_automation.application.pipeline import ShortsPipeline
  from shorts_automation.adapters import default_adapters
  settings = load_settings()
  pipeline = ShortsPipeline(**default_adapters(settings), settings=settings)
  report = pipeline.run("space battle with the Federation fleet")

Other text/video backends or publish platforms: implement the ports
(e.g. ITextGenerator, IVideoUploader) and inject them.
"""

__version__ = "0.3.0"
