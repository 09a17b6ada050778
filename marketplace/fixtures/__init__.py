"""Demo fixtures - hand-authored JSON payloads served to the demo principal."""
