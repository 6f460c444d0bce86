"""
Property Manager (PAPI) binding.
"""
