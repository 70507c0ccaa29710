import os

# headless plotting for the test run
os.environ.setdefault('MPLBACKEND', 'Agg')
