"""Numeric constants shared by the index, threshold and conversion routines."""

# Added to normalized-difference denominators so that 0/0 pixels stay finite.
NDI_EPSILON = 1e-9

# Added to linear backscatter before log10; a zero input maps to -90 dB.
DB_EPSILON = 1e-9

# Sentinel-2 / Landsat L2 digital numbers are stored as reflectance * 10000.
REFLECTANCE_SCALE = 0.0001

# Histogram resolution for Otsu thresholding.
OTSU_BINS = 256
