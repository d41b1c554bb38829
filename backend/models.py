import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Reference Data ──

class CoreDimensions(FrozenModel):
    od: float = Field(..., gt=0)  # mm
    id: float = Field(..., ge=0)  # mm
    height: float = Field(..., gt=0)  # mm

    @model_validator(mode="after")
    def _check_bore(self):
        if self.id >= self.od:
            raise ValueError("inner diameter must be smaller than outer diameter")
        return self

    @property
    def effective_area_m2(self) -> float:
        return (self.od - self.id) * 1e-3 * self.height * 1e-3 / 2

    @property
    def path_length_m(self) -> float:
        return math.pi * (self.od + self.id) * 1e-3 / 2

    @property
    def volume_cm3(self) -> float:
        return math.pi / 4 * (self.od ** 2 - self.id ** 2) * self.height / 1000


class FrequencyRange(FrozenModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., gt=0)


class FerriteCore(FrozenModel):
    id: str
    mix: str
    initial_permeability: float = Field(..., gt=0)
    saturation_flux_density: float = Field(..., gt=0)  # mT
    dimensions: CoreDimensions
    recommended_freq_range: FrequencyRange
    thermal_coefficient: float = Field(default=0.044, gt=0)
    loss_factor: float = Field(default=0.0, ge=0)


class PermeabilityPoint(FrozenModel):
    frequency: float  # MHz
    mu_prime: float
    mu_double_prime: float


class WireSpec(FrozenModel):
    gauge: int
    diameter: float  # mm
    area: float  # mm^2
    current_capacity: float  # A


class HamBand(FrozenModel):
    name: str
    min: float
    max: float
    center: Optional[float] = None


class CoaxCable(FrozenModel):
    id: str
    name: str
    outer_diameter: float = Field(..., gt=0)  # mm
    insulation_thickness: float = Field(..., ge=0)  # mm


class OperationMode(str, Enum):
    SSB = "SSB"
    CW = "CW"
    DIGITAL = "DIGITAL"
    FIFTY_PERCENT = "50_PERCENT"
    CONTINUOUS = "CONTINUOUS"


class WindingType(str, Enum):
    CURRENT = "current"
    VOLTAGE = "voltage"


# ── Balun Input ──

class DesignConfig(FrozenModel):
    input_impedance: float = Field(default=50.0, gt=0)
    output_impedance: float = Field(default=200.0, gt=0)
    power: float = Field(default=100.0, gt=0)
    min_frequency: float = Field(default=3.5, gt=0)
    max_frequency: float = Field(default=30.0, gt=0)
    operation_mode: OperationMode = Field(default=OperationMode.SSB)
    core_count: int = Field(default=1, ge=1, le=8)
    primary_turns: int = Field(default=0, ge=0)
    use_hybrid_design: bool = Field(default=False)
    winding_type: WindingType = Field(default=WindingType.CURRENT)

    @model_validator(mode="after")
    def _check_frequency_range(self):
        if self.min_frequency > self.max_frequency:
            raise ValueError("min_frequency must not exceed max_frequency")
        return self


class PresetConfig(FrozenModel):
    name: str
    config: DesignConfig
    suggested_core_model: str
    suggested_core_count: int = 1


class ReferenceData(FrozenModel):
    cores: Tuple[FerriteCore, ...]
    permeability: Dict[str, Tuple[PermeabilityPoint, ...]]
    wires: Tuple[WireSpec, ...]
    ham_bands: Tuple[HamBand, ...]
    region_bands: Dict[str, Dict[str, HamBand]]
    coax_cables: Dict[str, CoaxCable]
    presets: Tuple[PresetConfig, ...]
    duty_cycle_factors: Dict[str, float]


# ── Balun Output ──

class ImpedanceResult(FrozenModel):
    inductance: float  # uH
    resistance: float
    reactance: float
    impedance: float
    q_factor: float


class LossResult(FrozenModel):
    power_loss: float
    current: float
    efficiency: float
    input_voltage: float
    inductance: float  # uH
    resistance: float
    impedance: float
    flux_density: float  # mT
    power_out: float


class WindingTopology(FrozenModel):
    style: str
    construction: str  # classical | autotransformer | hybrid
    wire_count: int
    connection_details: str
    impedance_ratio: float
    turns_ratio: float
    numerator: int = 1
    denominator: int = 1
    tap_fraction: Optional[float] = None


class ValidationMessage(FrozenModel):
    type: str  # error | warning | info
    message: str


class ValidationResult(FrozenModel):
    valid: bool
    messages: List[ValidationMessage]


class BandCoverage(FrozenModel):
    name: str
    min: float
    max: float
    covered: bool


class DesignResult(FrozenModel):
    config: DesignConfig
    core: FerriteCore
    characteristic_impedance: float
    calculated_power_rating: float
    current: float

    inductance_at_min_freq: float  # uH
    reactance_at_min_freq: float
    resistance_at_min_freq: float
    impedance_at_min_freq: float
    q_factor_at_min_freq: float
    core_loss_at_min_freq: float
    efficiency_at_min_freq: float
    power_out_at_min_freq: float
    max_permissible_core_loss: float
    flux_density_at_min_freq: float  # mT
    winding_length_cm: float
    max_freq_based_on_length: float

    meets_rule_of_four: bool
    within_core_loss_limits: bool
    flux_density_in_linear_region: bool

    recommended_wire: WireSpec
    winding_info: WindingTopology
    band_coverage: List[BandCoverage] = Field(default_factory=list)
    alternative_configurations: Optional[List["DesignResult"]] = None
    hybrid: Optional["HybridDesignResult"] = None


class HybridDesignResult(FrozenModel):
    intermediate_impedance: float
    balun: DesignResult
    unun: DesignResult
    balun_validation: ValidationResult
    unun_validation: ValidationResult
    total_winding_length_cm: float
    total_max_frequency: float
    total_core_loss: float
    total_max_permissible_core_loss: float


DesignResult.model_rebuild()


class BandPowerPoint(FrozenModel):
    band: str
    frequency: float
    inductance: float
    reactance: float
    resistance: float
    q_factor: float
    flux_density: float
    power_out: float
    efficiency: float
    swr: float


class SwrPoint(FrozenModel):
    frequency: float
    swr: float


# ── Balun API Requests ──

class BalunDesignRequest(BaseModel):
    core_id: Optional[str] = Field(default=None)
    config: DesignConfig = Field(default_factory=DesignConfig)


class BalunDesignResponse(BaseModel):
    design: DesignResult
    validation: ValidationResult


class WindingTopologyRequest(BaseModel):
    input_impedance: float = Field(..., gt=0)
    output_impedance: float = Field(..., gt=0)
    use_hybrid_design: bool = Field(default=False)
    winding_type: WindingType = Field(default=WindingType.CURRENT)


class BandPowerRequest(BaseModel):
    core_id: Optional[str] = Field(default=None)
    turns: int = Field(..., ge=1)
    core_count: int = Field(default=1, ge=1, le=8)
    power: float = Field(default=100.0, gt=0)
    input_impedance: float = Field(default=50.0, gt=0)


# ── Choke / Inductor ──

class InductorParameters(FrozenModel):
    coax_type: str = Field(default="rg58")
    former_diameter: float = Field(..., gt=0)  # mm
    pitch_ratio: float = Field(default=1.0, ge=1.0, le=10.0)
    turn_count: int = Field(..., ge=1)
    frequency: Optional[float] = Field(default=None, gt=0)  # MHz
    iaru_region: str = Field(default="Region 1")
    ham_band: Optional[str] = Field(default=None)


class ComplexImpedance(FrozenModel):
    re: float
    im: float


class ChokeVerdict(FrozenModel):
    is_good_choke: bool
    performance_level: str  # poor | usable | excellent
    message: str


class InductorResult(FrozenModel):
    frequency: float  # MHz
    inductance: float  # H
    capacitance: float  # F
    dc_resistance: float
    self_resonant_freq: float  # Hz
    wire_length: float  # m

    skin_depth: float  # m
    ac_resistance: float
    inductive_reactance: float
    capacitive_reactance: float
    complex_impedance: ComplexImpedance
    impedance_magnitude: float
    quality_factor: float

    conductor_mean_diameter: float  # mm
    outer_diameter: float
    turn_spacing: float
    edge_to_edge_gap: float
    coil_length: float

    over_srf: bool
    verdict: ChokeVerdict


class FrequencyResponsePoint(FrozenModel):
    frequency: float  # MHz
    impedance_magnitude: Optional[float] = None
    phase: Optional[float] = None
    resistance: Optional[float] = None
    reactance: Optional[float] = None
    over_srf: bool
    performance_level: str


class FrequencyResponseRequest(BaseModel):
    parameters: InductorParameters
    start_mhz: float = Field(..., gt=0)
    stop_mhz: float = Field(..., gt=0)
    num_points: Optional[int] = Field(default=None, ge=2, le=2000)


class FrequencyResponseOutput(BaseModel):
    self_resonant_freq_mhz: float
    points: List[FrequencyResponsePoint]
