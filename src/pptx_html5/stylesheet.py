from __future__ import annotations

from pathlib import Path

from .utils import atomic_write

STYLESHEET_NAME = "presentation.css"

STYLESHEET = """\
/* PPTX to HTML5 Converter - Generated Styles */

.presentation-container {
  width: 100%;
  height: 100vh;
  overflow: hidden;
  position: relative;
  background: #000;
}

.slide {
  width: 100%;
  height: 100%;
  position: absolute;
  top: 0;
  left: 0;
  display: flex;
  align-items: center;
  justify-content: center;
  opacity: 0;
  transition: opacity 0.5s ease-in-out;
  background: white;
}

.slide.active {
  opacity: 1;
}

.slide-content {
  max-width: 90%;
  max-height: 90%;
  text-align: center;
}

.slide h2 {
  font-size: 2.5em;
  margin-bottom: 1em;
  color: #333;
}

.slide p {
  font-size: 1.2em;
  line-height: 1.6;
  color: #666;
}

/* Navigation controls */
.nav-controls {
  position: fixed;
  bottom: 20px;
  left: 50%;
  transform: translateX(-50%);
  z-index: 1000;
}

.nav-btn {
  background: rgba(0, 0, 0, 0.7);
  color: white;
  border: none;
  padding: 10px 20px;
  margin: 0 5px;
  border-radius: 5px;
  cursor: pointer;
  font-size: 16px;
}

.nav-btn:hover {
  background: rgba(0, 0, 0, 0.9);
}

.nav-btn:disabled {
  opacity: 0.5;
  cursor: not-allowed;
}

/* Slide indicator */
.slide-indicator {
  position: fixed;
  top: 20px;
  right: 20px;
  background: rgba(0, 0, 0, 0.7);
  color: white;
  padding: 10px 15px;
  border-radius: 5px;
  font-size: 14px;
  z-index: 1000;
}

/* Media elements */
img {
  max-width: 100%;
  height: auto;
}

/* Animation classes */
.fade-in {
  animation: fadeIn 0.5s ease-in-out;
}

@keyframes fadeIn {
  from { opacity: 0; }
  to { opacity: 1; }
}

.slide-in-left {
  animation: slideInLeft 0.5s ease-out;
}

@keyframes slideInLeft {
  from { transform: translateX(-100%); }
  to { transform: translateX(0); }
}

.slide-in-right {
  animation: slideInRight 0.5s ease-out;
}

@keyframes slideInRight {
  from { transform: translateX(100%); }
  to { transform: translateX(0); }
}
"""


def write_stylesheet(output_dir: Path) -> Path:
    path = output_dir / STYLESHEET_NAME
    atomic_write(path, STYLESHEET)
    return path


__all__ = ["STYLESHEET", "STYLESHEET_NAME", "write_stylesheet"]
