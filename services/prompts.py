"""
Prompt templates sent to the generative model.

The three query prompts ask for a raw Overpass QL string; the scoring prompt
asks for a single JSON object matching ``models.report_schema.ViabilityScores``.
"""


def competition_prompt(submission, radius=1000):
    lat, lon = submission.lat, submission.lon
    return f"""Act as a senior Geospatial Engineer.
Generate a lightweight Overpass query to find direct competitors for: "{submission.business}".

### CONSTRAINTS
- ONLY use node and way. NEVER use relations.
- Limit the query to the 2 most relevant OSM keys (e.g., amenity, shop, or craft).
- Use [out:json][timeout:30]; and "out tags center;".
- Return ONLY the raw string. No prose, no markdown.

### STRUCTURE
[out:json][timeout:30];
(
  node(around:{radius},{lat},{lon})[key~"val1|val2",i];
  way(around:{radius},{lat},{lon})[key~"val1|val2",i];
);
out tags center;"""


def complementary_prompt(submission, radius=1000):
    return f"""Act as a senior Geospatial Engineer and Business Intelligence Analyst.

Your task is to generate a **lightweight Overpass query** to find **complementary businesses** that increase foot traffic for a given business type.

### RULES
- Pick 2-4 highly relevant complementary categories.
- Include only nodes (skip ways/relations for speed).
- Use minimal regex per tag, max 3-4 keywords per line.
- Keep radius {radius}m max.
- Start with [out:json][timeout:30]; and end with `out center;`.
- Return ONLY the raw Overpass query string. Do not include markdown, explanations, or variable names.

### USER INPUT
- Latitude: {submission.lat}
- Longitude: {submission.lon}
- Radius: {radius}
- Business Type: "{submission.business}"
- Area: {submission.location}"""


def accessibility_prompt(submission, radius=1000):
    lat, lon = submission.lat, submission.lon
    return f"""Act as a senior Geospatial Engineer and Urban Planner.

Your task is to generate an **ultra-lightweight** Overpass query to check accessibility.

### LOGIC RULES
1. **NODE-ONLY SEARCH**: To prevent server timeouts and massive JSON files, search ONLY for nodes (points).
2. **INFRASTRUCTURE**: Target bus stops, railway stations, subway entrances, and taxi points.
3. **NO ROADS**: Do NOT query highway ways (lines). This is the cause of the data bloat.
4. **DATA EFFICIENCY**: Use [out:json][timeout:30]; and "out tags center;".

### STRICT OUTPUT FORMAT
- Return ONLY the raw Overpass query string.
- No markdown, no prose.
- Start with [out:json][timeout:30];

### STRUCTURE
[out:json][timeout:30];
(
  node(around:{radius},{lat},{lon})[highway~"bus_stop|platform",i];
  node(around:{radius},{lat},{lon})[railway~"station|subway_entrance",i];
  node(around:{radius},{lat},{lon})[amenity~"bus_station|taxi_point",i];
);
out tags center;"""


def scoring_prompt(submission, counts):
    return f"""Act as a Senior Business Intelligence Analyst and Urban Planner.

### DATA INPUT
- Business: "{submission.business}"
- Location: "{submission.location}" (Lat {submission.lat}, Lon {submission.lon})
- Competitor Count: {counts["competition"]}
- Complementary Count: {counts["complementary"]}
- Accessibility Count: {counts["accessibility"]}

### YOUR TASK
1. **Estimate Population Density:** Based on the coordinates provided, estimate the residential/commercial density on a scale of 0-100 (e.g., dense urban center = 90+, suburban = 40, rural = 10).
2. **Set Dynamic Caps:** Based on the density, define the ideal "Max" caps for this specific area.
3. **Calculate Scores:** Use the formulas below with your dynamic caps.

### FORMULAS
- **Competition Score:** Max(0, 100 - (competitorCount / DynamicMaxComp) * 100)
- **Complementary Score:** Min(100, (complementCount / DynamicMaxComp) * 100)
- **Accessibility Score:** Min(100, (accessibilityCount / DynamicMaxAcc) * 100)

### STRICT OUTPUT FORMAT (JSON ONLY, every number between 0 and 100)
{{
  "densityScore": number,
  "scores": {{
    "competition": number,
    "complementary": number,
    "accessibility": number,
    "density": number
  }},
  "verdict": "string (Short summary of viability)"
}}
"""
