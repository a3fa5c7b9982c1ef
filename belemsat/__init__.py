"""belemsat: spectral indices, thresholds and colormaps for flood and vegetation risk maps."""
