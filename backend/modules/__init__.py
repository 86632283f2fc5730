# Cosmic Garden - feature modules
