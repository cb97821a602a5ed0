"""Employee master: HR infotypes flattened into one record per employee."""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, provenance, rule

FIRST_NAMES = [
    "James", "Mary", "Robert", "Patricia", "John", "Jennifer", "Michael", "Linda",
    "David", "Elizabeth", "William", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
    "Thomas", "Sarah", "Christopher", "Karen", "Charles", "Lisa", "Daniel", "Nancy",
    "Matthew", "Betty", "Anthony", "Margaret", "Mark", "Sandra", "Donald", "Ashley",
    "Steven", "Dorothy", "Paul", "Kimberly", "Andrew", "Emily", "Joshua", "Donna",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas",
    "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson", "White",
    "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker", "Young",
    "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores",
]
# (org unit, job title, department, cost center)
DEPARTMENTS = [
    ("50001000", "Software Engineer", "IT", "CC1001"),
    ("50002000", "Financial Analyst", "FIN", "CC2001"),
    ("50003000", "Sales Representative", "SALES", "CC3001"),
    ("50004000", "HR Specialist", "HR", "CC4001"),
    ("50005000", "Production Operator", "PROD", "CC5001"),
    ("50006000", "Quality Inspector", "QA", "CC6001"),
    ("50007000", "Logistics Coordinator", "LOG", "CC7001"),
    ("50008000", "Marketing Manager", "MKT", "CC8001"),
]
# (street, city, region, postal code)
ADDRESSES = [
    ("Main St", "New York", "NY", "10001"),
    ("Oak Ave", "Chicago", "IL", "60601"),
    ("Elm Dr", "Los Angeles", "CA", "90001"),
    ("Park Blvd", "Houston", "TX", "77001"),
    ("Cedar Ln", "Phoenix", "AZ", "85001"),
    ("Pine Rd", "Philadelphia", "PA", "19101"),
    ("Maple Way", "San Antonio", "TX", "78201"),
    ("Lake Dr", "San Diego", "CA", "92101"),
]
PAY_SCALE_GROUPS = ["T1", "T2", "T3", "T4", "T5", "T6"]


class EmployeeMasterMigrationObject(BaseMigrationObject):
    """
    PA0000/PA0001/PA0002/PA0006/PA0007/PA0008/PA0105 -> employees.

    Actions, org assignment, personal data, address, working time, basic
    pay and communication are merged on the personnel number.
    """

    object_id = "EMPLOYEE_MASTER"
    name = "Employee Master"
    source_table = "PA0001"
    target_entity = "Employee"

    def field_mappings(self):
        return [
            # Org assignment (IT0001)
            rule("PERNR", "PersonnelNumber"),
            rule("BEGDA", "StartDate", ConverterTag.TO_DATE),
            rule("ENDDA", "EndDate", ConverterTag.TO_DATE),
            rule("BUKRS", "CompanyCode"),
            rule("WERKS", "PersonnelArea"),
            rule("BTRTL", "PersonnelSubarea"),
            rule("PERSG", "EmployeeGroup"),
            rule("PERSK", "EmployeeSubgroup"),
            rule("PLANS", "Position"),
            rule("STELL", "Job"),
            rule("ORGEH", "OrganizationalUnit"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            # Personal data (IT0002)
            rule("NACHN", "LastName", ConverterTag.TRIM),
            rule("VORNA", "FirstName", ConverterTag.TRIM),
            rule("MIDNM", "MiddleName"),
            rule("GESCH", "Gender"),
            rule("GBDAT", "DateOfBirth", ConverterTag.TO_DATE),
            rule("NATIO", "Nationality", ConverterTag.TO_UPPER_CASE),
            rule("SPRSL", "CorrespondenceLanguage", ConverterTag.TO_UPPER_CASE),
            rule("ANRED", "FormOfAddress"),
            rule("FAMST", "MaritalStatus"),
            rule("KONFE", "Religion"),
            # Communication (IT0105)
            rule("USRID_LONG", "EmailAddress", ConverterTag.TO_LOWER_CASE),
            rule("USRID", "UserID"),
            rule("TELNR", "PhoneNumber"),
            # Address (IT0006)
            rule("STRAS", "StreetName"),
            rule("ORT01", "CityName"),
            rule("PSTLZ", "PostalCode"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("STATE", "Region"),
            rule("ANSSA", "AddressType"),
            # Basic pay (IT0008)
            rule("ABKRS", "PayrollArea"),
            rule("TRFAR", "PayScaleType"),
            rule("TRFGB", "PayScaleArea"),
            rule("TRFGR", "PayScaleGroup"),
            rule("TRFST", "PayScaleLevel"),
            rule("WAERS", "PayCurrency"),
            rule("BET01", "PayAmount", ConverterTag.TO_DECIMAL),
            rule("LGA01", "WageType"),
            # Planned working time (IT0007)
            rule("SCHKZ", "WorkScheduleRule"),
            rule("ZTERF", "TimeManagementStatus"),
            rule("EMPCT", "EmploymentPercentage", ConverterTag.TO_DECIMAL),
            # Actions (IT0000)
            rule("STAT2", "EmploymentStatus"),
            rule("MASSN", "ActionType"),
            rule("MASSG", "ActionReason"),
            rule("EINDT", "HireDate", ConverterTag.TO_DATE),
            rule("AUSTD", "TerminationDate", ConverterTag.TO_DATE),
            rule("CTEDT", "ContractEndDate", ConverterTag.TO_DATE),
            rule("SBGRU", "ChallengeGroup"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["PersonnelNumber", "LastName", "FirstName", "CompanyCode"],
            duplicate_keys=["PersonnelNumber"],
            fuzzy_keys=["FirstName", "LastName", "DateOfBirth"],
            fuzzy_threshold=0.9,
            ranges=[("PayAmount", 0, None), ("EmploymentPercentage", 0, 100)],
            formats=[("EmailAddress", r"^[^@\s]+@[^@\s]+\.[a-z]{2,}$", "email address")],
        )

    def extract_mock(self):
        records = []
        for i in range(1, 41):
            org_unit, title, department, cost_center = DEPARTMENTS[(i - 1) % 8]
            street, city, region, postal_code = ADDRESSES[(i - 1) % 8]
            first, last = FIRST_NAMES[i - 1], LAST_NAMES[i - 1]
            company = "1000" if i <= 25 else "2000"
            male = i % 2 == 1
            hire_year = 2005 + i % 18
            terminated = i % 20 == 0
            leaving_date = f"{hire_year + 5}0630"
            records.append({
                "PERNR": str(10000000 + i),
                "BEGDA": f"{hire_year}0101",
                "ENDDA": leaving_date if terminated else "99991231",
                "BUKRS": company,
                "WERKS": company,
                "BTRTL": f"{company[:2]}01",
                "PERSG": "1" if i <= 30 else "2",
                "PERSK": "U1" if department == "PROD" else "S1",
                "PLANS": f"POS{org_unit[-4:]}",
                "STELL": title,
                "ORGEH": org_unit,
                "KOSTL": cost_center,
                "PRCTR": f"PC{company[:2]}01",
                "NACHN": last,
                "VORNA": first,
                "MIDNM": "A" if i % 5 == 0 else "",
                "GESCH": "1" if male else "2",
                "GBDAT": f"{1960 + i % 35}{i % 12 + 1:02d}15",
                "NATIO": "US",
                "SPRSL": "en",
                "ANRED": "Mr." if male else "Ms.",
                "FAMST": str(i % 3),
                "USRID_LONG": f"{first}.{last}@company.com",
                "USRID": f"{first[0]}{last}".upper()[:12],
                "TELNR": f"555-{1000 + i}",
                "STRAS": f"{100 + i} {street}",
                "ORT01": city,
                "PSTLZ": postal_code,
                "LAND1": "US",
                "STATE": region,
                "ANSSA": "1",
                "ABKRS": "B1" if company == "1000" else "B2",
                "TRFAR": "01",
                "TRFGB": "01" if company == "1000" else "02",
                "TRFGR": PAY_SCALE_GROUPS[(i - 1) % 6],
                "TRFST": f"{(i - 1) % 5 + 1:02d}",
                "WAERS": "USD",
                "BET01": str(40000 + i * 1500 + (i - 1) % 6 * 5000),
                "LGA01": "1000",
                "SCHKZ": "NORM",
                "ZTERF": "1",
                "EMPCT": "100.00" if i <= 30 else "50.00",
                "STAT2": "0" if terminated else "3",
                "MASSN": "Z2" if terminated else "Z1",
                "MASSG": "03" if terminated else "01",
                "EINDT": f"{hire_year}0101",
                "AUSTD": leaving_date if terminated else "",
                "CTEDT": f"{hire_year + 2}1231" if i % 10 == 0 else "",
            })
        return records
