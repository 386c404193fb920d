"""Jersey Swap: jersey replacement and background compositing via image generation."""
