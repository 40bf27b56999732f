"""Word segmentation and transliteration."""
