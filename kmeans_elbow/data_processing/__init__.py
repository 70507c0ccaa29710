"""
Data Processing Module

This module contains the clustering engine and its helpers:
- Feature standardization and column selection
- Euclidean distance
- k-means++ style seeding and Lloyd refinement
- WCSS sweep for elbow analysis
- Plotting and the end-to-end pipeline
"""
