"""Service layer: policy store, scoring, validation, history, generation"""
