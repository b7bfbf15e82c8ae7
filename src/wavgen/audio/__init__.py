"""Signal generators, spectral primitive and tapering."""
