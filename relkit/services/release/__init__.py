"""Release pipeline: version, preflight, build, bundle, tag, publish."""
