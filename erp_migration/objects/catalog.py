"""The built-in migration objects, in catalog order."""

from .assets import AssetAcquisitionMigrationObject, FixedAssetMigrationObject
from .business_partner import BusinessPartnerMigrationObject
from .configuration import (
    COConfigMigrationObject,
    FIConfigMigrationObject,
    MMConfigMigrationObject,
    SDConfigMigrationObject,
)
from .controlling import (
    CostCenterMigrationObject,
    CostElementMigrationObject,
    InternalOrderMigrationObject,
    ProfitCenterMigrationObject,
    ProfitSegmentMigrationObject,
    WBSElementMigrationObject,
)
from .finance import (
    BankMasterMigrationObject,
    CustomerOpenItemMigrationObject,
    GLAccountMasterMigrationObject,
    GLBalanceMigrationObject,
    VendorOpenItemMigrationObject,
)
from .hr import EmployeeMasterMigrationObject
from .integration import (
    BatchJobMigrationObject,
    BwExtractorMigrationObject,
    IdocConfigMigrationObject,
    RfcDestinationMigrationObject,
    WebServiceMigrationObject,
)
from .logistics import (
    TradeComplianceMigrationObject,
    TransportRouteMigrationObject,
    WarehouseStructureMigrationObject,
)
from .maintenance import (
    EquipmentMasterMigrationObject,
    FunctionalLocationMigrationObject,
    MaintenanceOrderMigrationObject,
)
from .manufacturing import (
    BatchMasterMigrationObject,
    BomRoutingMigrationObject,
    InspectionPlanMigrationObject,
    MaterialMasterMigrationObject,
    ProductionOrderMigrationObject,
    WorkCenterMigrationObject,
)
from .procurement import (
    PurchaseContractMigrationObject,
    PurchaseOrderMigrationObject,
    SchedulingAgreementMigrationObject,
    SourceListMigrationObject,
)
from .sales import PricingConditionMigrationObject, SalesOrderMigrationObject

BUILTIN_OBJECTS = [
    # Finance
    GLBalanceMigrationObject,
    GLAccountMasterMigrationObject,
    CustomerOpenItemMigrationObject,
    VendorOpenItemMigrationObject,
    BusinessPartnerMigrationObject,
    BankMasterMigrationObject,
    # Logistics master and transactional data
    MaterialMasterMigrationObject,
    PurchaseOrderMigrationObject,
    SalesOrderMigrationObject,
    PricingConditionMigrationObject,
    SourceListMigrationObject,
    SchedulingAgreementMigrationObject,
    PurchaseContractMigrationObject,
    BatchMasterMigrationObject,
    # Assets and controlling
    FixedAssetMigrationObject,
    AssetAcquisitionMigrationObject,
    CostCenterMigrationObject,
    ProfitCenterMigrationObject,
    CostElementMigrationObject,
    ProfitSegmentMigrationObject,
    InternalOrderMigrationObject,
    WBSElementMigrationObject,
    # HR, plant maintenance, production
    EmployeeMasterMigrationObject,
    EquipmentMasterMigrationObject,
    FunctionalLocationMigrationObject,
    WorkCenterMigrationObject,
    MaintenanceOrderMigrationObject,
    ProductionOrderMigrationObject,
    BomRoutingMigrationObject,
    InspectionPlanMigrationObject,
    # Configuration
    FIConfigMigrationObject,
    COConfigMigrationObject,
    MMConfigMigrationObject,
    SDConfigMigrationObject,
    # Logistics execution
    WarehouseStructureMigrationObject,
    TransportRouteMigrationObject,
    TradeComplianceMigrationObject,
    # Integration
    BwExtractorMigrationObject,
    RfcDestinationMigrationObject,
    IdocConfigMigrationObject,
    WebServiceMigrationObject,
    BatchJobMigrationObject,
]
