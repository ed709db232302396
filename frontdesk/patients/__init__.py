"""Patient records managed by front-desk staff and clinicians."""
