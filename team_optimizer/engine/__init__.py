"""Team composition & optimization analysis engine.

Sub-modules:
- composition     – roster size, experience levels, skill distribution
- skill_gaps      – required-skill coverage, critical gaps, emerging needs
- signals         – collaboration signal sources (profile proxy by default)
- collaboration   – connectors, isolated members, bottlenecks, pairing
- performance     – capacity vs. load, overload / underutilization, mismatches
- recommendations – immediate / short-term / long-term action items
- health          – headline team health scores
"""
