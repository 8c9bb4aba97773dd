"""Pure scheduling and addressing core.  No I/O."""
