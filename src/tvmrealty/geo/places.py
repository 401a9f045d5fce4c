"""
Static geography of Trivandrum.

Locality centers, market tiers, default beach distances and the
landmarks, schools and hospitals used for nearest-neighbor lookups.
Coordinates are approximate (4 decimal places, ~10 m).
"""

from typing import Optional

from tvmrealty.models import Coordinates, LocalityProfile, PointOfInterest

# (name, lat, lng, tier, default beach distance km)
_LOCALITY_ROWS = [
    ("Akkulam", 8.5243, 76.9225, "Suburb", 3.5),
    ("Ambalamukku", 8.4936, 76.9553, "Suburb", 9.0),
    ("Ambalathara", 8.5032, 76.9012, "Suburb", 4.5),
    ("Anayara", 8.5601, 76.9034, "Suburb", 4.0),
    ("Attingal", 8.6905, 76.8155, "Suburb", 10.0),
    ("Attukal", 8.4852, 76.9456, "Suburb", 5.0),
    ("Balaramapuram", 8.3827, 76.9682, "Suburb", 12.0),
    ("Beemapally", 8.4789, 76.9256, "Suburb", 0.5),
    ("Chackai", 8.5012, 76.9298, "Suburb", 2.5),
    ("Chanthavila", 8.3501, 77.0234, "Suburb", 12.0),
    ("Chenkottukonam", 8.6123, 77.0456, "Suburb", 14.0),
    ("East Fort", 8.4976, 76.9512, "City", 4.5),
    ("Enchakkal", 8.5156, 76.9234, "Suburb", 3.5),
    ("Gandhipuram", 8.3945, 76.9834, "Suburb", 10.0),
    ("Jagathy", 8.5423, 76.9567, "City", 7.0),
    ("Kaniyapuram", 8.5789, 76.8845, "Suburb", 6.0),
    ("Karamana", 8.5123, 76.9678, "City", 6.0),
    ("Karyavattom", 8.5567, 76.9012, "Tech", 8.0),
    ("Kazhakkoottam", 8.5967, 76.8734, "Tech", 3.0),
    ("Kesavadasapuram", 8.5245, 76.9456, "City", 7.0),
    ("Kilimanoor", 8.6445, 77.0534, "Suburb", 25.0),
    ("Kovalam", 8.4001, 76.9788, "Suburb", 0.5),
    ("Kowdiar", 8.5241, 76.9478, "Premium", 7.5),
    ("Kudappanakunnu", 8.5089, 77.0012, "Suburb", 10.0),
    ("Kumarapuram", 8.4956, 76.9589, "City", 5.5),
    ("Kuravankonam", 8.5334, 76.9823, "Suburb", 8.0),
    ("Malayinkeezhu", 8.4012, 77.0123, "Suburb", 14.0),
    ("Manacaud", 8.5134, 76.9712, "City", 5.0),
    ("Mangalapuram", 8.4523, 76.9123, "Suburb", 8.0),
    ("Mannanthala", 8.5456, 77.0001, "Suburb", 10.0),
    ("Maruthankuzhy", 8.5689, 76.8923, "Suburb", 8.0),
    ("Medical College", 8.5301, 76.9445, "Premium", 6.0),
    ("Menamkulam", 8.8234, 76.7512, "Suburb", 1.5),
    ("Muttada", 8.4678, 76.9934, "Suburb", 8.5),
    ("Nalanchira", 8.5167, 77.0034, "Suburb", 9.0),
    ("Nedumangad", 8.6012, 77.0012, "Suburb", 18.0),
    ("Nemom", 8.4123, 76.9934, "Suburb", 10.0),
    ("Neyyattinkara", 8.3989, 77.0823, "Suburb", 15.0),
    ("Ooruttambalam", 8.6234, 77.0623, "Suburb", 14.0),
    ("Palayam", 8.5067, 76.9523, "City", 5.5),
    ("Pallipuram", 8.4823, 76.9134, "Suburb", 5.0),
    ("Pangappara", 8.5523, 76.9012, "Suburb", 6.0),
    ("Pappanamcode", 8.5578, 76.9123, "Tech", 8.0),
    ("Pattom", 8.5147, 76.9470, "Premium", 6.5),
    ("Peroorkada", 8.5412, 76.9989, "Suburb", 9.0),
    ("Pettah", 8.5134, 76.9534, "City", 4.0),
    ("Peyad", 8.6156, 77.0234, "Suburb", 12.0),
    ("Pongumoodu", 8.5234, 76.9456, "Suburb", 7.0),
    ("Poojappura", 8.5167, 76.9734, "City", 8.0),
    ("Pothencode", 8.6812, 76.9445, "Suburb", 14.0),
    ("Powdikonam", 8.5789, 76.9823, "Suburb", 11.0),
    ("Pravachambalam", 8.5523, 77.0012, "Suburb", 11.0),
    ("Pulayanarkotta", 8.5334, 76.9234, "Suburb", 4.0),
    ("Sasthamangalam", 8.5412, 76.9445, "Premium", 8.0),
    ("Shangumugham", 8.4723, 76.9201, "Suburb", 0.2),
    ("Sreekaryam", 8.5712, 76.9023, "Tech", 7.0),
    ("St. Andrews", 8.4834, 76.9178, "Suburb", 0.3),
    ("Statue", 8.4934, 76.9456, "City", 5.0),
    ("Technocity", 8.5456, 76.8934, "Tech", 6.0),
    ("Technopark Area", 8.5473, 76.9012, "Tech", 3.0),
    ("Thampanoor", 8.4901, 76.9534, "City", 5.0),
    ("Thirumala", 8.5623, 76.9823, "Suburb", 10.0),
    ("Thiruvallam", 8.5334, 76.9123, "Suburb", 5.0),
    ("Thumba", 8.5334, 76.8812, "Suburb", 0.5),
    ("Ulloor", 8.5456, 76.9445, "City", 6.5),
    ("Vanchiyoor", 8.4967, 76.9512, "City", 4.5),
    ("Varkala", 8.7380, 76.7160, "Suburb", 1.0),
    ("Vattiyoorkavu", 8.5567, 77.0056, "Suburb", 10.0),
    ("Vazhuthacaud", 8.5089, 76.9567, "Premium", 6.5),
    ("Veli", 8.4823, 76.9156, "Suburb", 0.5),
    ("Vellayambalam", 8.5178, 76.9489, "Premium", 7.0),
    ("Vellayani", 8.4345, 77.0012, "Suburb", 8.0),
    ("Venjaramoodu", 8.6789, 77.0623, "Suburb", 22.0),
    ("Vizhinjam", 8.3801, 76.9890, "Suburb", 0.5),
]

LOCALITY_PROFILES: dict[str, LocalityProfile] = {
    name: LocalityProfile(
        name=name,
        coords=Coordinates(lat=lat, lng=lng),
        tier=tier,
        default_beach_km=beach_km,
    )
    for name, lat, lng, tier, beach_km in _LOCALITY_ROWS
}

LOCALITIES = sorted(LOCALITY_PROFILES)


def _poi(name: str, lat: float, lng: float) -> PointOfInterest:
    return PointOfInterest(name=name, coords=Coordinates(lat=lat, lng=lng))


AIRPORT = _poi("Trivandrum International Airport (TRV)", 8.4821, 76.9200)
LULU_MALL = _poi("Lulu Mall Trivandrum", 8.5132, 76.9506)
TECHNOPARK = _poi("Technopark Phase 1", 8.5473, 76.9012)
RAILWAY_STATION = _poi("Trivandrum Central Railway Station", 8.4901, 76.9534)
MEDICAL_COLLEGE = _poi("Government Medical College Hospital", 8.5301, 76.9445)
SCTIMST = _poi("SCTIMST Hospital", 8.5345, 76.9712)

LANDMARKS = {
    "airport": AIRPORT,
    "lulu_mall": LULU_MALL,
    "technopark": TECHNOPARK,
    "railway_station": RAILWAY_STATION,
    "medical_college": MEDICAL_COLLEGE,
    "sctimst": SCTIMST,
}

TOP_SCHOOLS = [
    # Central
    _poi("Loyola School", 8.5123, 76.9551),
    _poi("Holy Angels ISC School", 8.5234, 76.9478),
    _poi("Kendriya Vidyalaya Pattom", 8.5167, 76.9489),
    _poi("Sarvodaya Vidyalaya", 8.5089, 76.9534),
    _poi("St. Joseph's School", 8.5045, 76.9623),
    _poi("Chinmaya Vidyalaya", 8.5456, 76.9423),
    # Coast
    _poi("Govt. Model School Kovalam", 8.4050, 76.9750),
    _poi("Vizhinjam Public School", 8.3820, 76.9900),
    # Tech corridor
    _poi("Technopark Public School", 8.5550, 76.8800),
    _poi("Oxford School Kazhakkoottam", 8.5650, 76.8750),
    # North
    _poi("Kendriya Vidyalaya Peroorkada", 8.5450, 76.9700),
    _poi("NSS School Nedumangad", 8.6050, 77.0050),
]

MAJOR_HOSPITALS = [
    # Central
    _poi("SIMS Hospital", 8.5167, 76.9523),
    _poi("KIMS Hospital", 8.5123, 76.9456),
    _poi("Meditrina Hospital", 8.5234, 76.9512),
    _poi("Baby Memorial Hospital", 8.5045, 76.9589),
    _poi("SCTIMST", 8.5345, 76.9712),
    _poi("Cosmopolitan Hospital", 8.5456, 76.9623),
    # Coast
    _poi("Upasana Hospital Kovalam", 8.4100, 76.9800),
    _poi("Govt. Hospital Vizhinjam", 8.3850, 76.9920),
    # Tech corridor
    _poi("KIMS Kazhakkoottam", 8.5600, 76.8800),
    # North
    _poi("Govt. Hospital Nedumangad", 8.6000, 77.0000),
    _poi("PRS Hospital", 8.5400, 76.9800),
]


def get_locality(name: str) -> Optional[LocalityProfile]:
    """Look up a locality by exact name."""
    return LOCALITY_PROFILES.get(name)


def get_tier(name: str) -> str:
    """Market tier of a locality. Unknown localities are treated as Suburb."""
    profile = LOCALITY_PROFILES.get(name)
    return profile.tier if profile else "Suburb"
