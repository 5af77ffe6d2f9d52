"""naijatax — Nigerian personal and business income tax engine (2026 Tax Act)."""

__version__ = "0.1.0"

from naijatax.analytics.schedule import TaxSchedule as TaxSchedule
from naijatax.analytics.schedule import find_income_for_net as find_income_for_net
from naijatax.analytics.schedule import tax_schedule as tax_schedule
from naijatax.config.defaults import default_business_config as default_business_config
from naijatax.config.defaults import default_personal_config as default_personal_config
from naijatax.config.defaults import default_tables as default_tables
from naijatax.config.defaults import load_tables as load_tables
from naijatax.config.schema import BusinessTaxConfig as BusinessTaxConfig
from naijatax.config.schema import BusinessTaxReliefs as BusinessTaxReliefs
from naijatax.config.schema import CustomDeduction as CustomDeduction
from naijatax.config.schema import Deductible as Deductible
from naijatax.config.schema import PersonalTaxConfig as PersonalTaxConfig
from naijatax.config.schema import TaxableAddition as TaxableAddition
from naijatax.config.schema import TaxBracket as TaxBracket
from naijatax.config.schema import TaxReliefs as TaxReliefs
from naijatax.config.schema import TaxTables as TaxTables
from naijatax.config.schema import custom_deduction as custom_deduction
from naijatax.taxes.brackets import BracketTax as BracketTax
from naijatax.taxes.business import BusinessTaxBreakdown as BusinessTaxBreakdown
from naijatax.taxes.business import BusinessTaxEngine as BusinessTaxEngine
from naijatax.taxes.business import BusinessType as BusinessType
from naijatax.taxes.business import CompanySize as CompanySize
from naijatax.taxes.business import calculate_business_tax as calculate_business_tax
from naijatax.taxes.personal import PersonalTaxEngine as PersonalTaxEngine
from naijatax.taxes.personal import TaxBreakdown as TaxBreakdown
from naijatax.taxes.personal import calculate_tax as calculate_tax
from naijatax.taxes.personal import calculate_tax_from_monthly as calculate_tax_from_monthly
from naijatax.taxes.personal import calculate_tax_from_weekly as calculate_tax_from_weekly
from naijatax.utils.exceptions import ClassificationError as ClassificationError
from naijatax.utils.exceptions import ConfigError as ConfigError
from naijatax.utils.exceptions import NaijaTaxError as NaijaTaxError
