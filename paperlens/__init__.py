"""PaperLens: research paper analysis with retrieval-augmented generation."""
